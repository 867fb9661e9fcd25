"""
Runway image-to-video provider.

API: https://api.dev.runwayml.com
Model: gen4_turbo

Uses async task-based API:
1. Create task -> get id
2. Poll /v1/tasks/{id} (done by VideoSynthesizer)
"""
import logging
from typing import Dict, Optional

import httpx

from .base import BaseVideoProvider, VideoTask
from ..exceptions import ProviderUnavailable, SynthesisError

logger = logging.getLogger(__name__)


class RunwayVideoProvider(BaseVideoProvider):
    """Runway gen4_turbo image-to-video, portrait 720x1280."""

    BASE_URL = "https://api.dev.runwayml.com"
    API_VERSION = "2024-11-06"
    MODEL = "gen4_turbo"
    RATIO = "720:1280"

    def __init__(self, api_key: Optional[str], client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key or ""
        self.client = client or httpx.AsyncClient(timeout=60.0)

        if not self.api_key:
            logger.warning("[RUNWAY] No API key configured - video synthesis disabled")

    @property
    def name(self) -> str:
        return "runway"

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def _get_headers(self) -> Dict[str, str]:
        """Get authorization headers."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "X-Runway-Version": self.API_VERSION,
            "Content-Type": "application/json",
        }

    async def submit(self, image_url: str, prompt_text: str) -> str:
        if not self.is_available:
            raise ProviderUnavailable(self.name, "Missing RUNWAYML_API_SECRET")

        payload = {
            "model": self.MODEL,
            "promptImage": image_url,
            "promptText": prompt_text,
            "ratio": self.RATIO,
        }

        try:
            response = await self.client.post(
                f"{self.BASE_URL}/v1/image_to_video",
                headers=self._get_headers(),
                json=payload,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SynthesisError(self.name, f"Task submission failed: {e}") from e

        task_id = response.json().get("id")
        if not task_id:
            raise SynthesisError(self.name, "Task submission returned no id")

        logger.info(f"[RUNWAY] Task created: {task_id}")
        return task_id

    async def get_task(self, task_id: str) -> VideoTask:
        try:
            response = await self.client.get(
                f"{self.BASE_URL}/v1/tasks/{task_id}",
                headers=self._get_headers(),
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SynthesisError(self.name, f"Status check failed for {task_id}: {e}") from e

        data = response.json()
        output = data.get("output") or []
        return VideoTask(
            task_id=task_id,
            status=str(data.get("status", "")).upper(),
            output=[url for url in output if isinstance(url, str) and url],
            failure=data.get("failure"),
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
        logger.info("[RUNWAY] Provider closed")
