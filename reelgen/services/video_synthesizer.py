"""
Video Synthesizer - animates the first image into a silent portrait clip.

The provider works asynchronously: submit a task, then poll it on a fixed
interval. Polling is bounded by max_poll_attempts and runs on asyncio.sleep,
so the job can be cancelled between polls.
"""
import asyncio
import logging

from reelgen.providers.exceptions import ReelError, SynthesisError, VideoTimeoutError
from reelgen.providers.video import SUCCEEDED, BaseVideoProvider

from .models import ImageSet, SilentVideo

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "A cinematic video"
POLL_INTERVAL = 10.0  # seconds
MAX_POLL_ATTEMPTS = 60  # 10 minutes at the default interval


class VideoSynthesizer:
    """Image-to-video with a bounded status poll."""

    def __init__(
        self,
        provider: BaseVideoProvider,
        poll_interval: float = POLL_INTERVAL,
        max_poll_attempts: int = MAX_POLL_ATTEMPTS,
    ):
        if max_poll_attempts < 1:
            raise ValueError("max_poll_attempts must be at least 1")
        self.provider = provider
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts

    async def synthesize(self, images: ImageSet, prompt_text: str = DEFAULT_PROMPT) -> SilentVideo:
        """
        Raises:
            SynthesisError: empty image set, failed task or missing output
            VideoTimeoutError: no terminal status within max_poll_attempts
        """
        first = images.first
        if first is None:
            raise SynthesisError(self.provider.name, "Cannot synthesize video without images")

        try:
            task_id = await self.provider.submit(first.url, prompt_text)
        except ReelError:
            raise
        except Exception as e:
            raise SynthesisError(self.provider.name, f"Task submission failed: {e}") from e

        video_url = await self._poll_for_completion(task_id)
        logger.info(f"[VIDEO] Task {task_id} produced {video_url}")
        return SilentVideo(ref=video_url)

    async def _poll_for_completion(self, task_id: str) -> str:
        """Poll until the task is terminal and return the first output URL."""
        for attempt in range(1, self.max_poll_attempts + 1):
            await asyncio.sleep(self.poll_interval)

            try:
                task = await self.provider.get_task(task_id)
            except ReelError:
                raise
            except Exception as e:
                raise SynthesisError(self.provider.name, f"Status check failed: {e}") from e

            logger.info(f"[VIDEO] Poll #{attempt}: task={task_id} status={task.status}")

            if not task.is_terminal:
                continue

            if task.status == SUCCEEDED:
                if not task.output:
                    raise SynthesisError(self.provider.name, f"Task {task_id} succeeded without output")
                return task.output[0]

            detail = f": {task.failure}" if task.failure else ""
            raise SynthesisError(self.provider.name, f"Task {task_id} ended with {task.status}{detail}")

        raise VideoTimeoutError(
            self.provider.name,
            task_id,
            self.max_poll_attempts,
            self.max_poll_attempts * self.poll_interval,
        )
