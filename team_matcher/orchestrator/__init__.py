"""Matching pipeline package."""

from team_matcher.orchestrator.errors import (
    MatchingError,
    ConfigurationError,
    MissingCredentialError,
    ProviderError,
    ResponseParseError,
    ProjectNotFoundError,
)

__all__ = [
    "MatchingError",
    "ConfigurationError",
    "MissingCredentialError",
    "ProviderError",
    "ResponseParseError",
    "ProjectNotFoundError",
]
