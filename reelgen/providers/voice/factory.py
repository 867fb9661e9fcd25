"""
Voice provider factory.
"""
import logging
from typing import Literal

from reelgen.config import AppConfig

from .base import BaseVoiceProvider
from .polly import PollyVoiceProvider
from .edge import EdgeVoiceProvider

logger = logging.getLogger(__name__)


ProviderType = Literal["auto", "polly", "edge"]


class VoiceProviderFactory:
    """Factory for creating voice providers."""

    @classmethod
    def create(cls, config: AppConfig, provider: ProviderType = "auto") -> BaseVoiceProvider:
        if provider == "edge":
            return EdgeVoiceProvider()
        if provider == "polly" or config.storage.aws_access_key_id:
            return PollyVoiceProvider(config.storage, voice_id=config.pipeline.voice_id)

        logger.warning("[VOICE] No AWS credentials - using edge-tts")
        return EdgeVoiceProvider()


def get_voice_provider(config: AppConfig, provider: ProviderType = "auto") -> BaseVoiceProvider:
    """Get a voice provider for the given configuration."""
    return VoiceProviderFactory.create(config, provider)
