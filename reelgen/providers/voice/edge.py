"""
edge-tts voice provider.
"""
import logging

from .base import BaseVoiceProvider
from ..exceptions import SynthesisError

logger = logging.getLogger(__name__)


class EdgeVoiceProvider(BaseVoiceProvider):
    """Microsoft Edge online TTS. Free, no credentials."""

    DEFAULT_VOICE = "en-US-JennyNeural"

    def __init__(self, voice: str = DEFAULT_VOICE, rate: str = "+0%"):
        self.voice = voice
        self.rate = rate

    @property
    def name(self) -> str:
        return "edge-tts"

    @property
    def is_available(self) -> bool:
        return True

    async def synthesize(self, text: str) -> bytes:
        import edge_tts

        communicate = edge_tts.Communicate(text, self.voice, rate=self.rate)
        chunks = []
        try:
            async for chunk in communicate.stream():
                if chunk["type"] == "audio":
                    chunks.append(chunk["data"])
        except Exception as e:
            logger.error(f"[EDGE-TTS] Stream failed: {e}")
            raise SynthesisError(self.name, f"Speech stream failed: {e}") from e

        return b"".join(chunks)
