"""
Amazon Polly voice provider.
"""
import asyncio
import logging
from typing import Optional

from reelgen.config import StorageConfig

from .base import BaseVoiceProvider
from ..exceptions import SynthesisError

logger = logging.getLogger(__name__)


class PollyVoiceProvider(BaseVoiceProvider):
    """Neural Polly voice, en-US, MP3 output."""

    ENGINE = "neural"
    LANGUAGE_CODE = "en-US"
    OUTPUT_FORMAT = "mp3"

    def __init__(
        self,
        aws_config: StorageConfig,
        voice_id: str = "Joanna",
        client=None,
    ):
        self._aws = aws_config
        self.voice_id = voice_id
        self._client = client

    @property
    def name(self) -> str:
        return "polly"

    @property
    def is_available(self) -> bool:
        return True

    @property
    def client(self):
        if self._client is None:
            import boto3

            self._client = boto3.client(
                "polly",
                region_name=self._aws.region,
                aws_access_key_id=self._aws.aws_access_key_id or None,
                aws_secret_access_key=self._aws.aws_secret_access_key or None,
            )
        return self._client

    async def synthesize(self, text: str) -> bytes:
        try:
            response = await asyncio.to_thread(
                self.client.synthesize_speech,
                OutputFormat=self.OUTPUT_FORMAT,
                Text=text,
                VoiceId=self.voice_id,
                Engine=self.ENGINE,
                LanguageCode=self.LANGUAGE_CODE,
            )
        except Exception as e:
            logger.error(f"[POLLY] synthesize_speech failed: {e}")
            raise SynthesisError(self.name, f"Speech synthesis request failed: {e}") from e

        stream = response.get("AudioStream")
        if stream is None:
            raise SynthesisError(self.name, "No audio stream from Polly")

        try:
            data = await asyncio.to_thread(self._drain, stream)
        finally:
            stream.close()

        logger.info(f"[POLLY] Synthesized {len(data)} bytes with voice {self.voice_id}")
        return data

    @staticmethod
    def _drain(stream, chunk_size: int = 64 * 1024) -> bytes:
        chunks = []
        for chunk in iter(lambda: stream.read(chunk_size), b""):
            chunks.append(chunk)
        return b"".join(chunks)
