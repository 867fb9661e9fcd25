"""
Speech Synthesizer - narration audio, persisted as soon as it exists.
"""
import logging
import uuid

from reelgen.providers.exceptions import ReelError, SynthesisError
from reelgen.providers.storage import BaseStorageGateway
from reelgen.providers.voice import BaseVoiceProvider

from .models import AUDIO_PREFIX, AudioAsset

logger = logging.getLogger(__name__)


def new_audio_key() -> str:
    return f"{AUDIO_PREFIX}{uuid.uuid4()}.mp3"


class SpeechSynthesizer:
    """Synthesizes a script and stores the MP3 under audio/<uuid>.mp3."""

    def __init__(self, voice: BaseVoiceProvider, storage: BaseStorageGateway):
        self.voice = voice
        self.storage = storage

    async def synthesize(self, script: str) -> AudioAsset:
        """
        Raises:
            SynthesisError: blank script, upstream failure or no audio
            StorageError: the audio could not be persisted
        """
        if not script or not script.strip():
            raise SynthesisError(self.voice.name, "Script must not be empty")

        try:
            data = await self.voice.synthesize(script.strip())
        except ReelError:
            raise
        except Exception as e:
            raise SynthesisError(self.voice.name, f"Speech synthesis failed: {e}") from e

        if not data:
            raise SynthesisError(self.voice.name, "No audio stream returned")

        key = new_audio_key()
        await self.storage.put_object(key, data, self.voice.content_type)
        logger.info(f"[SPEECH] Stored narration at {key} ({len(data)} bytes)")

        return AudioAsset(key=key, data=data, content_type=self.voice.content_type)
