"""
OpenAI image generation provider.
"""
import base64
import binascii
import logging
from typing import List, Optional

from openai import AsyncOpenAI

from .base import BaseImageProvider
from ..exceptions import GenerationError, ProviderUnavailable

logger = logging.getLogger(__name__)


class OpenAIImageProvider(BaseImageProvider):
    """gpt-image-1 through the OpenAI SDK. Payloads come back base64 encoded."""

    # Closest portrait size the API offers for vertical video
    SIZE = "1024x1536"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-image-1",
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.client = client
        if self.client is None and api_key:
            self.client = AsyncOpenAI(api_key=api_key)

    @property
    def name(self) -> str:
        return "openai-images"

    @property
    def is_available(self) -> bool:
        return self.client is not None

    async def generate(self, prompt: str, count: int = 4) -> List[Optional[bytes]]:
        if not self.is_available:
            raise ProviderUnavailable(self.name, "Missing OPENAI_API_KEY")

        logger.info(f"[IMAGES] Requesting {count} images: {prompt[:60]}")
        try:
            response = await self.client.images.generate(
                model=self.model,
                prompt=prompt,
                n=count,
                size=self.SIZE,
            )
        except Exception as e:
            logger.error(f"[IMAGES] Generation failed: {e}")
            raise GenerationError(self.name, f"Image generation failed: {e}") from e

        return [self._decode(item) for item in (response.data or [])]

    def _decode(self, item) -> Optional[bytes]:
        payload = getattr(item, "b64_json", None)
        if not isinstance(payload, str) or not payload:
            return None
        try:
            return base64.b64decode(payload)
        except (binascii.Error, ValueError):
            logger.warning("[IMAGES] Dropping result with undecodable payload")
            return None
