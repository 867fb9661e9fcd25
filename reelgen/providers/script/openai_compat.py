"""
OpenAI-compatible chat completion provider (DeepSeek by default).
"""
import logging
from typing import Optional

from openai import AsyncOpenAI

from .base import BaseScriptProvider
from ..exceptions import GenerationError, ProviderUnavailable

logger = logging.getLogger(__name__)


class OpenAIScriptProvider(BaseScriptProvider):
    """Chat completions through the OpenAI SDK against any compatible endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "deepseek-chat",
        base_url: Optional[str] = "https://api.deepseek.com",
        client: Optional[AsyncOpenAI] = None,
    ):
        self._api_key = api_key or ""
        self.model = model
        self.client = client
        if self.client is None and self._api_key:
            self.client = AsyncOpenAI(api_key=self._api_key, base_url=base_url)

        if self.client is None:
            logger.warning("[SCRIPT] No API key - script generation disabled")
        else:
            logger.info(f"[SCRIPT] Initialized with {model}")

    @property
    def name(self) -> str:
        return "openai-compatible"

    @property
    def is_available(self) -> bool:
        return self.client is not None

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 100,
        temperature: float = 0.8,
    ) -> str:
        if not self.is_available:
            raise ProviderUnavailable(self.name, "Missing DEEPSEEK_API_KEY / OPENAI_API_KEY")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except Exception as e:
            logger.error(f"[SCRIPT] Completion request failed: {e}")
            raise GenerationError(self.name, f"Completion request failed: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
