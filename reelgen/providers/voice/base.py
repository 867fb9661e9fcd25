"""
Base class for voice/TTS providers.
"""
from abc import ABC, abstractmethod


class BaseVoiceProvider(ABC):
    """Abstract base class for voice/TTS providers."""

    content_type: str = "audio/mpeg"

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
    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize speech from text.

        Args:
            text: Text to synthesize

        Returns:
            The complete encoded audio payload (MP3)
        """
        pass
