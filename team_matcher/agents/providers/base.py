"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    model: str

    @abstractmethod
    def generate(self, prompt: str, system: str, temperature: float = 0.7) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: User prompt
            system: System instruction
            temperature: Sampling temperature

        Returns:
            Raw response text

        Raises:
            ProviderError: If the provider call fails
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging (e.g., 'groq', 'openai')."""
        pass
