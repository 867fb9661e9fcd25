"""
Bing image search provider - real photos instead of generated ones.
"""
import asyncio
import logging
from typing import List, Optional

import httpx

from .base import BaseImageProvider
from ..exceptions import GenerationError, ProviderUnavailable

logger = logging.getLogger(__name__)


class BingImageProvider(BaseImageProvider):
    """Searches Bing for photos of the subject and downloads the top hits."""

    SEARCH_URL = "https://api.bing.microsoft.com/v7.0/images/search"

    def __init__(self, api_key: Optional[str], client: Optional[httpx.AsyncClient] = None):
        self._api_key = api_key or ""
        self.client = client or httpx.AsyncClient(timeout=30.0, follow_redirects=True)

    @property
    def name(self) -> str:
        return "bing"

    @property
    def is_available(self) -> bool:
        return bool(self._api_key)

    async def generate(self, prompt: str, count: int = 4) -> List[Optional[bytes]]:
        if not self.is_available:
            raise ProviderUnavailable(self.name, "Missing BING_SEARCH_KEY")

        try:
            response = await self.client.get(
                self.SEARCH_URL,
                params={
                    "q": prompt,
                    "count": str(count),
                    "safeSearch": "Strict",
                    "imageType": "Photo",
                    "aspect": "Tall",
                },
                headers={"Ocp-Apim-Subscription-Key": self._api_key},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise GenerationError(self.name, f"Bing image search failed: {e}") from e

        urls = [item.get("contentUrl") for item in response.json().get("value", [])]
        urls = [url for url in urls if url][:count]
        logger.info(f"[BING] Found {len(urls)} images for {prompt!r}")

        return list(await asyncio.gather(*(self._download(url) for url in urls)))

    async def _download(self, url: str) -> Optional[bytes]:
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"[BING] Skipping {url}: {e}")
            return None
        return response.content or None

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
        logger.info("[BING] Provider closed")
