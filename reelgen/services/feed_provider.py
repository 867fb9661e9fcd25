"""
Feed Provider - paginated reels with presigned playback URLs.

Engagement numbers are placeholders; nothing about a feed item is persisted.
"""
import asyncio
import logging
import random
import re
from pathlib import Path
from typing import Optional

from reelgen.providers.storage import BaseStorageGateway, ListedObject

from .models import REELS_PREFIX, FeedPage, ReelFeedItem, utc_now_iso

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = (".mp4", ".mov", ".avi", ".webm")
_VIDEO_KEY = re.compile(
    "(" + "|".join(re.escape(ext) for ext in VIDEO_EXTENSIONS) + ")$", re.IGNORECASE
)

MAX_LIKES = 10000
MAX_COMMENTS = 1000


def is_video_key(key: str) -> bool:
    return bool(_VIDEO_KEY.search(key))


class FeedProvider:
    """Lists stored reels page by page."""

    def __init__(
        self,
        storage: BaseStorageGateway,
        url_ttl: int = 3600,
        presign_attempts: int = 3,
        presign_backoff: float = 0.5,
        prefix: str = REELS_PREFIX,
    ):
        self.storage = storage
        self.url_ttl = url_ttl
        self.presign_attempts = max(1, presign_attempts)
        self.presign_backoff = presign_backoff
        self.prefix = prefix

    async def list_reels(
        self,
        limit: int,
        cursor: Optional[str] = None,
        session: Optional[str] = None,
    ) -> FeedPage:
        """
        Return up to `limit` reels starting at `cursor`.

        Items whose URL cannot be presigned are dropped, so a page may hold
        fewer than `limit` items even when more exist. With a `session` the
        page is shuffled.

        Raises:
            ValueError: limit < 1
            ConfigError: no bucket configured
            StorageError: the listing itself failed
        """
        if limit < 1:
            raise ValueError("limit must be a positive integer")

        listing = await self.storage.list_objects(self.prefix, limit, cursor)
        candidates = [obj for obj in listing.objects if is_video_key(obj.key)]

        if not candidates:
            logger.info(f"[FEED] No videos under {self.prefix} (cursor={cursor})")
            return FeedPage(items=[], next_cursor=listing.next_token, scanned=0)

        resolved = await asyncio.gather(*(self._to_item(obj) for obj in candidates))
        items = [item for item in resolved if item is not None]

        dropped = len(candidates) - len(items)
        if dropped:
            logger.warning(f"[FEED] Dropped {dropped} reels without a playable URL")

        if session:
            random.shuffle(items)

        logger.info(f"[FEED] Returning {len(items)} reels (has_more={listing.next_token is not None})")
        return FeedPage(items=items, next_cursor=listing.next_token, scanned=len(candidates))

    async def _to_item(self, obj: ListedObject) -> Optional[ReelFeedItem]:
        url = await self._presign_with_retry(obj.key)
        if url is None:
            return None

        item_id = Path(obj.key).stem
        created_at = obj.last_modified.isoformat() if obj.last_modified else utc_now_iso()
        return ReelFeedItem(
            id=item_id,
            video_url=url,
            caption=f"Reel #{item_id}",
            likes=random.randrange(MAX_LIKES),
            comments=random.randrange(MAX_COMMENTS),
            created_at=created_at,
        )

    async def _presign_with_retry(self, key: str) -> Optional[str]:
        for attempt in range(1, self.presign_attempts + 1):
            try:
                return await self.storage.presign_url(key, expires_in=self.url_ttl)
            except Exception as e:
                logger.warning(
                    f"[FEED] Presign attempt {attempt}/{self.presign_attempts} failed for {key}: {e}"
                )
                if attempt < self.presign_attempts:
                    await asyncio.sleep(self.presign_backoff)
        return None
