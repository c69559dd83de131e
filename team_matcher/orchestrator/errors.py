"""Custom error types for the matching pipeline."""


class MatchingError(Exception):
    """Base error for matching operations."""
    pass


class ConfigurationError(MatchingError):
    """Provider configuration is unusable (unsupported provider name)."""

    def __init__(self, message: str, provider: str = None):
        super().__init__(message)
        self.provider = provider


class MissingCredentialError(ConfigurationError):
    """The selected provider has no API key configured."""

    def __init__(self, message: str, provider: str = None, env_var: str = None):
        super().__init__(message, provider=provider)
        self.env_var = env_var


class ProviderError(MatchingError):
    """The language-model provider call failed."""

    def __init__(self, message: str, provider: str = None, status_code: int = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class ResponseParseError(MatchingError):
    """No usable match records could be recovered from a model response."""

    def __init__(self, message: str, preview: str = None):
        super().__init__(message)
        self.preview = preview


class ProjectNotFoundError(MatchingError):
    """Project does not exist."""

    def __init__(self, project_id: int):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id
