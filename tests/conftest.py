"""
Pytest configuration and fixtures for reelgen tests.
"""
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import pytest

# Set test environment before importing reelgen modules
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DEBUG"] = "true"
os.environ["SCRATCH_DIR"] = tempfile.mkdtemp(prefix="reelgen-tests-")
for _name in ("AWS_S3_BUCKET", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "RUNWAYML_API_SECRET"):
    os.environ.pop(_name, None)

from reelgen.providers.images import BaseImageProvider
from reelgen.providers.script import BaseScriptProvider
from reelgen.providers.storage import InMemoryStorageGateway
from reelgen.providers.video import SUCCEEDED, BaseVideoProvider, VideoTask
from reelgen.providers.voice import BaseVoiceProvider


VIDEO_URL = "https://cdn.runway.test/outputs/clip.mp4"
VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42silent-video"
AUDIO_BYTES = b"ID3narration-audio"
MERGED_BYTES = b"\x00\x00\x00\x18ftypmp42merged-video"


class FakeScriptProvider(BaseScriptProvider):
    """Returns a fixed completion and records prompts."""

    def __init__(self, text: str = "Serena Williams redefined tennis with power and grace."):
        self.text = text
        self.calls: List[Dict] = []

    @property
    def name(self) -> str:
        return "fake-script"

    @property
    def is_available(self) -> bool:
        return True

    async def complete(self, system_prompt, user_prompt, max_tokens=100, temperature=0.8) -> str:
        self.calls.append({
            "system": system_prompt,
            "user": user_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        return self.text


class FakeVoiceProvider(BaseVoiceProvider):
    def __init__(self, data: bytes = AUDIO_BYTES):
        self.data = data
        self.calls: List[str] = []

    @property
    def name(self) -> str:
        return "fake-voice"

    @property
    def is_available(self) -> bool:
        return True

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        return self.data


class FakeImageProvider(BaseImageProvider):
    def __init__(self, payloads: Optional[List[Optional[bytes]]] = None):
        self.payloads = payloads
        self.calls: List[tuple] = []

    @property
    def name(self) -> str:
        return "fake-images"

    @property
    def is_available(self) -> bool:
        return True

    async def generate(self, prompt: str, count: int = 4) -> List[Optional[bytes]]:
        self.calls.append((prompt, count))
        if self.payloads is not None:
            return list(self.payloads)
        return [f"png-{i}".encode() for i in range(count)]


class FakeVideoProvider(BaseVideoProvider):
    """Replays a scripted sequence of task states, repeating the last one."""

    def __init__(self, statuses: Optional[List[VideoTask]] = None):
        self.statuses = statuses or [
            VideoTask(task_id="task-1", status="PENDING"),
            VideoTask(task_id="task-1", status="RUNNING"),
            VideoTask(task_id="task-1", status=SUCCEEDED, output=[VIDEO_URL]),
        ]
        self.submitted: List[tuple] = []
        self.polls = 0

    @property
    def name(self) -> str:
        return "fake-video"

    @property
    def is_available(self) -> bool:
        return True

    async def submit(self, image_url: str, prompt_text: str) -> str:
        self.submitted.append((image_url, prompt_text))
        return "task-1"

    async def get_task(self, task_id: str) -> VideoTask:
        index = min(self.polls, len(self.statuses) - 1)
        self.polls += 1
        return self.statuses[index]


def media_handler(request: httpx.Request) -> httpx.Response:
    """Serves the silent video and any object presigned by the memory gateway."""
    if str(request.url).startswith(VIDEO_URL):
        return httpx.Response(200, content=VIDEO_BYTES)
    if request.url.host.endswith("memory.local"):
        return httpx.Response(200, content=AUDIO_BYTES)
    return httpx.Response(404)


def fake_ffmpeg(cmd, **kwargs):
    """Stands in for subprocess.run: writes the output file FFmpeg would produce."""
    Path(cmd[-1]).write_bytes(MERGED_BYTES)
    return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage():
    """Empty in-memory object store."""
    return InMemoryStorageGateway(bucket="test-bucket")


@pytest.fixture
def script_provider():
    return FakeScriptProvider()


@pytest.fixture
def voice_provider():
    return FakeVoiceProvider()


@pytest.fixture
def image_provider():
    return FakeImageProvider()


@pytest.fixture
def video_provider():
    return FakeVideoProvider()


@pytest.fixture
def fakes():
    """Fake provider classes, for tests that need custom behaviour."""
    class Fakes:
        Script = FakeScriptProvider
        Voice = FakeVoiceProvider
        Images = FakeImageProvider
        Video = FakeVideoProvider
    return Fakes


@pytest.fixture
def media_client():
    """httpx client that serves test media without network access."""
    return httpx.AsyncClient(transport=httpx.MockTransport(media_handler))


@pytest.fixture
def ffmpeg_ok(monkeypatch):
    """Patch the transcoder's subprocess.run with a successful FFmpeg run."""
    monkeypatch.setattr("reelgen.services.media_transcoder.subprocess.run", fake_ffmpeg)
    return fake_ffmpeg


@pytest.fixture
def pipeline(storage, script_provider, voice_provider, image_provider, video_provider,
             media_client, temp_dir):
    """A fully wired orchestrator over fakes and in-memory storage."""
    from reelgen.services import (
        ImageGenerator,
        MediaTranscoder,
        ReelOrchestrator,
        ScriptGenerator,
        SpeechSynthesizer,
        VideoSynthesizer,
    )

    transcoder = MediaTranscoder(
        storage,
        ffmpeg_path="ffmpeg",
        scratch_dir=temp_dir,
        timeout=30,
        http_client=media_client,
    )
    return ReelOrchestrator(
        ScriptGenerator(script_provider),
        SpeechSynthesizer(voice_provider, storage),
        ImageGenerator(image_provider, storage, count=4),
        VideoSynthesizer(video_provider, poll_interval=0, max_poll_attempts=5),
        transcoder,
        storage,
        http_client=media_client,
    )


# FastAPI test client fixture
@pytest.fixture
def test_client(storage, pipeline):
    """Create a test client with the pipeline and feed bound to in-memory storage."""
    from fastapi.testclient import TestClient

    from reelgen.api.dependencies import get_feed_provider, get_orchestrator
    from reelgen.api.main import app
    from reelgen.services import FeedProvider

    app.dependency_overrides[get_orchestrator] = lambda: pipeline
    app.dependency_overrides[get_feed_provider] = lambda: FeedProvider(storage, presign_backoff=0)
    yield TestClient(app)
    app.dependency_overrides.clear()
