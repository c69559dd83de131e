"""Groq LLM provider.

Groq serves an OpenAI-compatible API, so this reuses the OpenAI client
pointed at Groq's base URL.
"""

import os
from typing import Optional

from team_matcher.agents.providers.openai_provider import OpenAIProvider

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GroqProvider(OpenAIProvider):
    """Groq-hosted open model provider (default, free tier)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "llama-3.1-8b-instant",
        max_tokens: int = 2000,
        base_url: str = GROQ_BASE_URL,
    ):
        super().__init__(
            api_key=api_key or os.environ.get("GROQ_API_KEY"),
            model=model,
            max_tokens=max_tokens,
            base_url=base_url,
        )

    @property
    def name(self) -> str:
        return "groq"
