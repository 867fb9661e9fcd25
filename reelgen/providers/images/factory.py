"""
Image provider factory.
"""
import logging
from typing import Literal

from reelgen.config import AIConfig

from .base import BaseImageProvider
from .openai_images import OpenAIImageProvider
from .bing import BingImageProvider

logger = logging.getLogger(__name__)


ProviderType = Literal["auto", "openai", "bing"]


class ImageProviderFactory:
    """Factory for creating image providers."""

    @classmethod
    def create(cls, ai_config: AIConfig, provider: ProviderType = "auto") -> BaseImageProvider:
        if provider == "bing":
            return BingImageProvider(ai_config.bing_search_key)
        if provider == "openai":
            return OpenAIImageProvider(ai_config.openai_api_key, model=ai_config.image_model)
        return cls._create_auto(ai_config)

    @classmethod
    def _create_auto(cls, ai_config: AIConfig) -> BaseImageProvider:
        if ai_config.has_openai:
            return OpenAIImageProvider(ai_config.openai_api_key, model=ai_config.image_model)
        if ai_config.has_bing:
            logger.info("[IMAGES] OpenAI not configured - using Bing image search")
            return BingImageProvider(ai_config.bing_search_key)
        # Unavailable; raises ProviderUnavailable on first use
        return OpenAIImageProvider(None, model=ai_config.image_model)


def get_image_provider(ai_config: AIConfig, provider: ProviderType = "auto") -> BaseImageProvider:
    """Get an image provider for the given configuration."""
    return ImageProviderFactory.create(ai_config, provider)
