"""
Media Transcoder - muxes the narration into the silent video with FFmpeg.

Every failure surfaces as AudioProcessingError so the orchestrator can keep
the silent video instead of failing the job.
"""
import asyncio
import logging
import shutil
import subprocess
import uuid
from pathlib import Path
from typing import Iterable, Optional

import aiofiles
import httpx

from reelgen.providers.exceptions import (
    AudioProcessingCause,
    AudioProcessingError,
    ConfigError,
)
from reelgen.providers.storage import BaseStorageGateway

from .models import CombinedVideo

logger = logging.getLogger(__name__)

FFMPEG_TIMEOUT = 300  # seconds
AUDIO_URL_TTL = 3600


def is_remote(ref: str) -> bool:
    return ref.startswith("http://") or ref.startswith("https://")


class MediaTranscoder:
    """Downloads video + audio to scratch space and runs FFmpeg on them."""

    def __init__(
        self,
        storage: BaseStorageGateway,
        ffmpeg_path: str = "ffmpeg",
        scratch_dir: Optional[Path] = None,
        timeout: float = FFMPEG_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.storage = storage
        self.ffmpeg_path = ffmpeg_path
        self.scratch_dir = Path(scratch_dir) if scratch_dir else Path("/tmp/reelgen")
        self.timeout = timeout
        self.client = http_client or httpx.AsyncClient(timeout=120.0, follow_redirects=True)

    async def merge_audio_into_video(self, video_ref: str, audio_key: str) -> CombinedVideo:
        """
        Merge the stored narration into the video.

        Args:
            video_ref: URL or local path of the silent video
            audio_key: Storage key of the narration MP3

        Returns:
            CombinedVideo pointing at a local MP4 in the scratch directory

        Raises:
            AudioProcessingError: on any failure, with a cause describing it
        """
        job = uuid.uuid4().hex
        self.scratch_dir.mkdir(parents=True, exist_ok=True)
        video_file = self.scratch_dir / f"input-{job}.mp4"
        audio_file = self.scratch_dir / f"audio-{job}.mp3"
        output_file = self.scratch_dir / f"output-{job}.mp4"

        try:
            audio_url = await self._resolve_audio_url(audio_key)
            await self._fetch_video(video_ref, video_file)
            await self._download(audio_url, audio_file, "audio")
            await self._run_ffmpeg(video_file, audio_file, output_file)

            if not output_file.exists() or output_file.stat().st_size == 0:
                raise AudioProcessingError(
                    "FFmpeg processed without error but output file is missing or empty",
                    AudioProcessingCause.EMPTY_OUTPUT,
                )
        except AudioProcessingError:
            await self.cleanup([output_file])
            raise
        except Exception as e:
            logger.error(f"[TRANSCODER] Failed to add audio to video: {e}")
            await self.cleanup([output_file])
            raise AudioProcessingError(
                "Failed to add audio to video", AudioProcessingCause.TOOL_FAILED, e
            ) from e
        finally:
            await self.cleanup([video_file, audio_file])

        logger.info(f"[TRANSCODER] Merged audio into {output_file}")
        return CombinedVideo(path=str(output_file), has_audio=True)

    async def _resolve_audio_url(self, audio_key: str) -> str:
        try:
            return await self.storage.presign_url(audio_key, expires_in=AUDIO_URL_TTL)
        except ConfigError as e:
            raise AudioProcessingError(
                "Storage bucket is not configured", AudioProcessingCause.MISSING_BUCKET, e
            ) from e
        except Exception as e:
            raise AudioProcessingError(
                f"Could not resolve audio {audio_key}", AudioProcessingCause.FETCH_FAILED, e
            ) from e

    async def _fetch_video(self, video_ref: str, target: Path) -> None:
        if is_remote(video_ref):
            await self._download(video_ref, target, "video")
            return
        try:
            await asyncio.to_thread(shutil.copyfile, video_ref, target)
        except OSError as e:
            raise AudioProcessingError(
                f"Failed to read local video {video_ref}", AudioProcessingCause.FETCH_FAILED, e
            ) from e

    async def _download(self, url: str, target: Path, label: str) -> None:
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise AudioProcessingError(
                f"Failed to fetch {label}", AudioProcessingCause.FETCH_FAILED, e
            ) from e

        async with aiofiles.open(target, "wb") as f:
            await f.write(response.content)

    async def _run_ffmpeg(self, video_file: Path, audio_file: Path, output_file: Path) -> None:
        # Video stream copied untouched, audio re-encoded, cut to the shorter stream
        cmd = [
            self.ffmpeg_path, "-y",
            "-i", str(video_file),
            "-i", str(audio_file),
            "-c:v", "copy",
            "-c:a", "aac",
            "-map", "0:v",
            "-map", "1:a",
            "-shortest",
            str(output_file),
        ]

        logger.info(f"[TRANSCODER] Running FFmpeg: {' '.join(cmd)}")

        try:
            result = await asyncio.to_thread(
                subprocess.run,
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise AudioProcessingError(
                f"FFmpeg could not run: {e}", AudioProcessingCause.TOOL_FAILED, e
            ) from e

        if result.returncode != 0:
            logger.error(f"[TRANSCODER] FFmpeg failed: {result.stderr}")
            raise AudioProcessingError(
                f"FFmpeg exited with code {result.returncode}", AudioProcessingCause.TOOL_FAILED
            )

    @staticmethod
    async def cleanup(paths: Iterable[Path]) -> None:
        """Remove scratch files, ignoring ones that are already gone."""
        for path in paths:
            try:
                await asyncio.to_thread(Path(path).unlink, True)
            except OSError as e:
                logger.warning(f"[TRANSCODER] Could not remove {path}: {e}")

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
        logger.info("[TRANSCODER] Closed")
