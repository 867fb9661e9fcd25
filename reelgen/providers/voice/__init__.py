"""
Voice/TTS providers.
"""
from .base import BaseVoiceProvider
from .polly import PollyVoiceProvider
from .edge import EdgeVoiceProvider
from .factory import VoiceProviderFactory, get_voice_provider

__all__ = [
    "BaseVoiceProvider",
    "PollyVoiceProvider",
    "EdgeVoiceProvider",
    "VoiceProviderFactory",
    "get_voice_provider",
]
