"""
Tests for the FFmpeg audio merge.
"""
import asyncio
import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from reelgen.config import StorageConfig
from reelgen.providers.exceptions import AudioProcessingCause, AudioProcessingError
from reelgen.providers.storage import S3StorageGateway
from reelgen.services.media_transcoder import MediaTranscoder

VIDEO_URL = "https://cdn.runway.test/outputs/clip.mp4"
MERGED_BYTES = b"merged-video"


@pytest.fixture
def audio_key(storage):
    key = "audio/narration.mp3"
    asyncio.run(storage.put_object(key, b"ID3audio", "audio/mpeg"))
    return key


@pytest.fixture
def transcoder(storage, media_client, temp_dir):
    return MediaTranscoder(storage, scratch_dir=temp_dir, timeout=5, http_client=media_client)


class TestMediaTranscoder:

    def test_merge_builds_ffmpeg_command(self, transcoder, audio_key, monkeypatch, temp_dir):
        calls = []

        def run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            with open(cmd[-1], "wb") as f:
                f.write(MERGED_BYTES)
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr("reelgen.services.media_transcoder.subprocess.run", run)

        combined = asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, audio_key))

        assert combined.has_audio is True
        with open(combined.path, "rb") as f:
            assert f.read() == MERGED_BYTES

        cmd, kwargs = calls[0]
        assert cmd[0] == "ffmpeg"
        assert cmd[cmd.index("-c:v") + 1] == "copy"
        assert cmd[cmd.index("-c:a") + 1] == "aac"
        assert "-shortest" in cmd
        assert cmd.count("-map") == 2
        assert kwargs["timeout"] == 5

        # Inputs are removed, only the merged output remains
        assert [p.name for p in temp_dir.iterdir()] == [Path(combined.path).name]

    def test_local_video_is_copied(self, transcoder, audio_key, ffmpeg_ok, temp_dir):
        local_video = temp_dir / "silent.mp4"
        local_video.write_bytes(b"local-video")

        combined = asyncio.run(transcoder.merge_audio_into_video(str(local_video), audio_key))

        assert combined.has_audio is True
        assert local_video.exists()

    def test_missing_bucket(self, media_client, temp_dir, ffmpeg_ok):
        storage = S3StorageGateway(StorageConfig(bucket=None), client=MagicMock())
        transcoder = MediaTranscoder(storage, scratch_dir=temp_dir, http_client=media_client)

        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, "audio/x.mp3"))

        assert exc_info.value.cause == AudioProcessingCause.MISSING_BUCKET

    def test_video_download_failure(self, transcoder, audio_key, ffmpeg_ok):
        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video("https://cdn.test/gone.mp4", audio_key))

        assert exc_info.value.cause == AudioProcessingCause.FETCH_FAILED

    def test_unknown_audio_key(self, transcoder, ffmpeg_ok):
        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, "audio/missing.mp3"))

        assert exc_info.value.cause == AudioProcessingCause.FETCH_FAILED

    def test_ffmpeg_nonzero_exit(self, transcoder, audio_key, monkeypatch, temp_dir):
        monkeypatch.setattr(
            "reelgen.services.media_transcoder.subprocess.run",
            lambda cmd, **kw: subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Invalid data"),
        )

        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, audio_key))

        assert exc_info.value.cause == AudioProcessingCause.TOOL_FAILED
        assert list(temp_dir.iterdir()) == []

    def test_ffmpeg_timeout(self, transcoder, audio_key, monkeypatch):
        def run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

        monkeypatch.setattr("reelgen.services.media_transcoder.subprocess.run", run)

        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, audio_key))

        assert exc_info.value.cause == AudioProcessingCause.TOOL_FAILED

    def test_ffmpeg_missing_binary(self, transcoder, audio_key, monkeypatch):
        def run(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr("reelgen.services.media_transcoder.subprocess.run", run)

        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, audio_key))

        assert exc_info.value.cause == AudioProcessingCause.TOOL_FAILED

    def test_empty_output(self, transcoder, audio_key, monkeypatch):
        def run(cmd, **kwargs):
            open(cmd[-1], "wb").close()
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr("reelgen.services.media_transcoder.subprocess.run", run)

        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, audio_key))

        assert exc_info.value.cause == AudioProcessingCause.EMPTY_OUTPUT

    def test_unexpected_error_is_wrapped(self, transcoder, audio_key, ffmpeg_ok):
        transcoder.client = MagicMock()
        transcoder.client.get = AsyncMock(side_effect=RuntimeError("socket exploded"))

        with pytest.raises(AudioProcessingError) as exc_info:
            asyncio.run(transcoder.merge_audio_into_video(VIDEO_URL, audio_key))

        assert exc_info.value.cause == AudioProcessingCause.TOOL_FAILED
        assert isinstance(exc_info.value.original_error, RuntimeError)

    def test_cleanup_ignores_missing_files(self, temp_dir):
        existing = temp_dir / "a.mp4"
        existing.write_bytes(b"x")

        asyncio.run(MediaTranscoder.cleanup([existing, temp_dir / "missing.mp4"]))

        assert not existing.exists()

    def test_close_releases_client(self, transcoder, media_client):
        asyncio.run(transcoder.close())

        assert media_client.is_closed
