"""OpenAI LLM provider."""

import os
from typing import Optional

from openai import APIConnectionError, APIStatusError, OpenAI, OpenAIError

from team_matcher.agents.providers.base import LLMProvider
from team_matcher.orchestrator.errors import ProviderError


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 2000,
        base_url: Optional[str] = None,
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        self.max_tokens = max_tokens
        self._client = OpenAI(api_key=self.api_key, base_url=base_url)

    @property
    def name(self) -> str:
        return "openai"

    def _normalize_text(self, text: str) -> str:
        """Replace smart quotes and other problematic unicode with ASCII equivalents."""
        replacements = {
            '\u201c': '"',  # Left double quote
            '\u201d': '"',  # Right double quote
            '\u2018': "'",  # Left single quote
            '\u2019': "'",  # Right single quote
            '\u2013': '-',  # En dash
            '\u2014': '-',  # Em dash
        }
        for old, new in replacements.items():
            text = text.replace(old, new)
        return text

    def generate(self, prompt: str, system: str, temperature: float = 0.7) -> str:
        """Generate a completion and return its raw text."""
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": self._normalize_text(prompt)},
                ],
                temperature=temperature,
                max_tokens=self.max_tokens,
            )
        except APIStatusError as e:
            raise ProviderError(str(e), provider=self.name, status_code=e.status_code) from e
        except APIConnectionError as e:
            raise ProviderError(f"Connection failed: {e}", provider=self.name) from e
        except OpenAIError as e:
            raise ProviderError(str(e), provider=self.name) from e

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()
