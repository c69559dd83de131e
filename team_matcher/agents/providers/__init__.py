"""LLM providers for team matching."""

from team_matcher.agents.providers.base import LLMProvider
from team_matcher.agents.providers.openai_provider import OpenAIProvider
from team_matcher.agents.providers.groq_provider import GroqProvider

__all__ = ["LLMProvider", "OpenAIProvider", "GroqProvider"]
