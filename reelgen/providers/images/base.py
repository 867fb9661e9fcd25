"""
Base class for image generation providers.
"""
from abc import ABC, abstractmethod
from typing import List, Optional


class BaseImageProvider(ABC):
    """Abstract base class for image providers."""

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
    async def generate(self, prompt: str, count: int = 4) -> List[Optional[bytes]]:
        """
        Produce up to `count` portrait (9:16-ish) images for a prompt.

        Returns:
            One entry per upstream result; None where the result carried no
            image payload
        """
        pass

    async def close(self) -> None:
        """Release held connections. Nothing to release by default."""
        return None
