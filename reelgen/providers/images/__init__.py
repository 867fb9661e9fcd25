"""
Image generation providers.
"""
from .base import BaseImageProvider
from .openai_images import OpenAIImageProvider
from .bing import BingImageProvider
from .factory import ImageProviderFactory, get_image_provider

__all__ = [
    "BaseImageProvider",
    "OpenAIImageProvider",
    "BingImageProvider",
    "ImageProviderFactory",
    "get_image_provider",
]
