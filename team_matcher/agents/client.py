"""Process-wide language-model provider.

The provider is built lazily on first use, and only when configuration is
valid. ``reset_provider()`` drops it so tests can swap credentials or
providers without restarting the process.
"""

import logging
import threading
from typing import Optional

from team_matcher.agents.providers.base import LLMProvider
from team_matcher.agents.providers.groq_provider import GroqProvider
from team_matcher.agents.providers.openai_provider import OpenAIProvider
from team_matcher.config import API_KEY_ENV, SUPPORTED_PROVIDERS, MatchingConfig
from team_matcher.orchestrator.errors import (
    ConfigurationError,
    MissingCredentialError,
    ProviderError,
)

logger = logging.getLogger(__name__)

_PROVIDER_CLASSES = {
    "groq": GroqProvider,
    "openai": OpenAIProvider,
}

_provider: Optional[LLMProvider] = None
_provider_key: Optional[tuple] = None
_lock = threading.Lock()


def build_provider(config: MatchingConfig) -> LLMProvider:
    """Create a provider for the configured name, model and key.

    Raises:
        ConfigurationError: Unsupported provider name
        MissingCredentialError: No API key for the provider
    """
    provider = config.provider
    if provider not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"Unsupported provider: {provider!r}. "
            f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}",
            provider=provider,
        )

    api_key = config.api_key_for(provider)
    if not api_key:
        env_var = API_KEY_ENV[provider]
        raise MissingCredentialError(
            f"{env_var} is not set",
            provider=provider,
            env_var=env_var,
        )

    return _PROVIDER_CLASSES[provider](
        api_key=api_key,
        model=config.model_for(provider),
        max_tokens=config.max_tokens,
    )


def get_provider(config: Optional[MatchingConfig] = None) -> LLMProvider:
    """Get or initialize the shared provider.

    A changed provider, model or key in ``config`` replaces the cached
    instance.
    """
    global _provider, _provider_key

    config = config or MatchingConfig.from_env()
    key = (config.provider, config.model_for(), config.api_key_for(), config.max_tokens)

    with _lock:
        if _provider is None or _provider_key != key:
            _provider = build_provider(config)
            _provider_key = key
            logger.info(f"Initialized {_provider.name} provider with model {_provider.model}")
        return _provider


def reset_provider() -> None:
    """Drop the shared provider (test teardown, credential rotation)."""
    global _provider, _provider_key
    with _lock:
        _provider = None
        _provider_key = None


def classify_provider_error(error: Exception) -> str:
    """Label a provider failure for diagnostic logging.

    Returns one of: rate_limited, auth_failed, server_error,
    model_deprecated, network, unknown.
    """
    status = getattr(error, "status_code", None)
    message = str(error).lower()

    if status == 429:
        return "rate_limited"
    if status in (401, 403):
        return "auth_failed"
    if status is not None and status >= 500:
        return "server_error"
    if "decommissioned" in message or "no longer supported" in message:
        return "model_deprecated"
    if isinstance(error, ProviderError) and status is None and message.startswith("connection failed"):
        return "network"
    return "unknown"
