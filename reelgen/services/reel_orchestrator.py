"""
Reel Orchestrator - runs one generation job end to end.

script -> speech -> images -> video -> merge -> upload

Every step is fatal except the audio merge: an AudioProcessingError there
degrades the job to the silent video, which is still uploaded.
"""
import asyncio
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Set, Tuple

import aiofiles
import httpx

from reelgen.providers.exceptions import AudioProcessingError, StorageError
from reelgen.providers.storage import BaseStorageGateway

from .image_generator import ImageGenerator
from .media_transcoder import MediaTranscoder, is_remote
from .models import (
    REELS_PREFIX,
    AudioAsset,
    CombinedVideo,
    GenerationRequest,
    ImageSet,
    Script,
    StoredReel,
)
from .script_generator import ScriptGenerator
from .speech_synthesizer import SpeechSynthesizer
from .video_synthesizer import VideoSynthesizer

logger = logging.getLogger(__name__)

# Strong references to fire-and-forget jobs until they finish
BACKGROUND_TASKS: Set[asyncio.Task] = set()


def new_reel_key() -> str:
    return f"{REELS_PREFIX}{uuid.uuid4()}.mp4"


class ReelOrchestrator:
    """
    Sequences the pipeline components for one subject.

    Usage:
        orchestrator = ReelOrchestrator(script, speech, images, video, transcoder, storage)
        reel = await orchestrator.generate_and_upload_reel("Serena Williams")
    """

    def __init__(
        self,
        script_generator: ScriptGenerator,
        speech_synthesizer: SpeechSynthesizer,
        image_generator: ImageGenerator,
        video_synthesizer: VideoSynthesizer,
        transcoder: MediaTranscoder,
        storage: BaseStorageGateway,
        concurrent: bool = False,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.script_generator = script_generator
        self.speech_synthesizer = speech_synthesizer
        self.image_generator = image_generator
        self.video_synthesizer = video_synthesizer
        self.transcoder = transcoder
        self.storage = storage
        self.concurrent = concurrent
        self.client = http_client or httpx.AsyncClient(timeout=120.0, follow_redirects=True)

    async def generate_and_upload_reel(self, subject_name: str) -> StoredReel:
        """
        Generate one reel and upload it under reels/<uuid>.mp4.

        Raises:
            GenerationError, SynthesisError, VideoTimeoutError, StorageError,
            ConfigError: from the failing step, unchanged
        """
        request = GenerationRequest(subject_name)
        subject = request.subject_name
        logger.info(f"[REEL] Starting job for {subject}")

        if self.concurrent:
            script, audio, images = await self._narrate_and_illustrate(subject)
        else:
            script, audio = await self._narrate(subject)
            images = await self._step("images", self.image_generator.generate_images(subject))

        logger.info(f"[REEL] {len(images)} images, narration at {audio.key}")

        silent = await self._step("video", self.video_synthesizer.synthesize(images))

        try:
            final = await self.transcoder.merge_audio_into_video(silent.ref, audio.key)
        except AudioProcessingError as e:
            logger.warning(
                f"[REEL] Audio merge failed ({e.cause.value}), uploading silent video: {e.message}"
            )
            final = CombinedVideo(path=silent.ref, has_audio=False)

        try:
            reel = await self._step("upload", self._upload(final))
        finally:
            if final.has_audio:
                await self.transcoder.cleanup([Path(final.path)])

        logger.info(f"[REEL] Uploaded {reel.key} for {subject} (audio={final.has_audio})")
        return reel

    def run_in_background(self, subject_name: str) -> asyncio.Task:
        """Schedule a job on the running loop and return its task."""
        task = asyncio.create_task(self.generate_and_upload_reel(subject_name))
        BACKGROUND_TASKS.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    @staticmethod
    def _on_background_done(task: asyncio.Task) -> None:
        BACKGROUND_TASKS.discard(task)
        if task.cancelled():
            logger.warning("[REEL] Background job cancelled")
        elif task.exception() is not None:
            logger.error(f"[REEL] Background job failed: {task.exception()}")

    async def _narrate(self, subject: str) -> Tuple[Script, AudioAsset]:
        script = await self._step("script", self.script_generator.generate_script(subject))
        audio = await self._step("speech", self.speech_synthesizer.synthesize(script.text))
        return script, audio

    async def _narrate_and_illustrate(self, subject: str) -> Tuple[Script, AudioAsset, ImageSet]:
        """Run narration and images side by side; a failure cancels the other branch."""
        narration = asyncio.create_task(self._narrate(subject))
        illustration = asyncio.create_task(
            self._step("images", self.image_generator.generate_images(subject))
        )
        branches = (narration, illustration)

        try:
            (script, audio), images = await asyncio.gather(*branches)
        except BaseException:
            for task in branches:
                task.cancel()
            await asyncio.gather(*branches, return_exceptions=True)
            raise

        return script, audio, images

    async def close(self) -> None:
        """Close the HTTP clients held by the pipeline."""
        await self.transcoder.close()
        await self.image_generator.provider.close()
        await self.video_synthesizer.provider.close()
        await self.client.aclose()
        logger.info("[REEL] Orchestrator closed")

    async def _step(self, name: str, coro):
        try:
            return await coro
        except Exception as e:
            logger.error(f"[REEL] Step '{name}' failed: {type(e).__name__}: {e}")
            raise

    async def _upload(self, video: CombinedVideo) -> StoredReel:
        data = await self._read_video(video.path)
        key = new_reel_key()
        await self.storage.put_object(key, data, "video/mp4")
        reel_id = Path(key).stem
        return StoredReel(
            id=reel_id,
            key=key,
            last_modified=datetime.now(timezone.utc),
            size=len(data),
        )

    async def _read_video(self, ref: str) -> bytes:
        if is_remote(ref):
            try:
                response = await self.client.get(ref)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise StorageError(self.storage.name, f"Could not download video {ref}: {e}") from e
            return response.content

        async with aiofiles.open(ref, "rb") as f:
            return await f.read()
