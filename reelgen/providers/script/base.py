"""
Base class for script (text completion) providers.
"""
from abc import ABC, abstractmethod


class BaseScriptProvider(ABC):
    """Abstract base class for text completion providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available."""
        pass

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 100,
        temperature: float = 0.8,
    ) -> str:
        """
        Request a bounded-length completion.

        Args:
            system_prompt: Role instruction for the model
            user_prompt: The actual request
            max_tokens: Completion token ceiling
            temperature: Sampling temperature

        Returns:
            Raw completion text (may be empty)
        """
        pass
