"""Configuration for the matching pipeline."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from team_matcher.db.config import get_db_path
from team_matcher.orchestrator.errors import ConfigurationError

SUPPORTED_PROVIDERS = ("groq", "openai")

DEFAULT_PROVIDER = "groq"
DEFAULT_MODELS = {
    "groq": "llama-3.1-8b-instant",
    "openai": "gpt-3.5-turbo",
}
API_KEY_ENV = {
    "groq": "GROQ_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def _env_number(name: str, default, cast):
    """Read a numeric setting, rejecting values that do not parse."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class MatchingConfig:
    """Configuration for the matcher and its language-model provider."""

    # Paths
    db_path: Path = field(default_factory=get_db_path)

    # Provider selection
    provider: str = DEFAULT_PROVIDER
    groq_model: str = DEFAULT_MODELS["groq"]
    openai_model: str = DEFAULT_MODELS["openai"]
    groq_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    # Generation
    temperature: float = 0.7
    max_tokens: int = 2000

    # Analytics
    default_duration_weeks: int = 12

    @classmethod
    def from_env(cls) -> "MatchingConfig":
        """Create configuration from environment variables.

        Raises:
            ConfigurationError: A numeric setting does not parse
        """
        return cls(
            db_path=get_db_path(),
            provider=os.environ.get("AI_PROVIDER", DEFAULT_PROVIDER).strip().lower(),
            groq_model=os.environ.get("GROQ_MODEL") or DEFAULT_MODELS["groq"],
            openai_model=os.environ.get("OPENAI_MODEL") or DEFAULT_MODELS["openai"],
            groq_api_key=os.environ.get("GROQ_API_KEY") or None,
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            temperature=_env_number("AI_TEMPERATURE", 0.7, float),
            max_tokens=_env_number("AI_MAX_TOKENS", 2000, int),
            default_duration_weeks=_env_number("DEFAULT_DURATION_WEEKS", 12, int),
        )

    def model_for(self, provider: Optional[str] = None) -> str:
        provider = provider or self.provider
        return self.groq_model if provider == "groq" else self.openai_model

    def api_key_for(self, provider: Optional[str] = None) -> Optional[str]:
        provider = provider or self.provider
        return self.groq_api_key if provider == "groq" else self.openai_api_key
