"""
Reel pipeline data model.

Intermediate assets (script, audio, images, videos) live only for one
generation job. StoredReel is the durable record; ReelFeedItem is derived
from it on every feed request and never persisted.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from reelgen.providers.exceptions import GenerationError

REELS_PREFIX = "reels/"
IMAGE_PREFIX = "image/"
AUDIO_PREFIX = "audio/"


@dataclass
class GenerationRequest:
    """One incoming reel generation request."""
    subject_name: str

    def __post_init__(self):
        if not self.subject_name or not self.subject_name.strip():
            raise GenerationError("request", "Subject name must not be empty")
        self.subject_name = self.subject_name.strip()


@dataclass
class Script:
    """Short narration text for one reel."""
    text: str
    subject_name: str = ""


@dataclass
class AudioAsset:
    """Synthesized narration, already persisted under `key`."""
    key: str
    data: bytes = b""
    content_type: str = "audio/mpeg"


@dataclass
class GeneratedImage:
    """A persisted still image and its time-limited access URL."""
    key: str
    url: str


@dataclass
class ImageSet:
    """Ordered images for one reel. May hold fewer than requested."""
    images: List[GeneratedImage] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.images)

    @property
    def urls(self) -> List[str]:
        return [image.url for image in self.images]

    @property
    def first(self) -> Optional[GeneratedImage]:
        return self.images[0] if self.images else None


@dataclass
class SilentVideo:
    """Synthesized video without narration (URL or local path)."""
    ref: str


@dataclass
class CombinedVideo:
    """Final video to upload. `has_audio` is False when the merge degraded."""
    path: str
    has_audio: bool = True


@dataclass
class StoredReel:
    """The canonical durable record of an uploaded reel."""
    id: str
    key: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None


@dataclass
class ReelFeedItem:
    """A reel as shown in the feed."""
    id: str
    video_url: str
    caption: str
    likes: int
    comments: int
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "videoUrl": self.video_url,
            "caption": self.caption,
            "likes": self.likes,
            "comments": self.comments,
            "createdAt": self.created_at,
        }


@dataclass
class FeedPage:
    """
    One page of the feed. The cursor is opaque and echoed back by clients.

    `scanned` counts the video objects the listing returned, including any
    dropped because they could not be presigned.
    """
    items: List[ReelFeedItem] = field(default_factory=list)
    next_cursor: Optional[str] = None
    scanned: int = 0

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    @property
    def is_exhausted(self) -> bool:
        """Nothing was listed here and nothing follows."""
        return self.scanned == 0 and not self.has_more


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
