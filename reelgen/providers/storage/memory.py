"""
In-memory storage gateway - local development and test double.
"""
import base64
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from .base import BaseStorageGateway, ListedObject, ObjectListing
from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class InMemoryStorageGateway(BaseStorageGateway):
    """Dict-backed object store with S3-like listing semantics."""

    def __init__(self, bucket: str = "local"):
        self.bucket = bucket
        self._objects: Dict[str, Tuple[bytes, str, datetime]] = {}

    @property
    def base_url(self) -> str:
        return f"https://{self.bucket}.memory.local"

    @property
    def name(self) -> str:
        return "memory"

    @property
    def is_available(self) -> bool:
        return True

    def keys(self, prefix: str = "") -> list:
        return sorted(k for k in self._objects if k.startswith(prefix))

    def content_type(self, key: str) -> str:
        return self._objects[key][1]

    async def list_objects(
        self,
        prefix: str,
        limit: int,
        continuation_token: Optional[str] = None,
    ) -> ObjectListing:
        keys = self.keys(prefix)
        start = self._decode_token(continuation_token) if continuation_token else 0
        page = keys[start:start + limit]
        end = start + len(page)

        objects = []
        for key in page:
            data, _, modified = self._objects[key]
            objects.append(ListedObject(key=key, last_modified=modified, size=len(data)))

        next_token = self._encode_token(end) if end < len(keys) else None
        return ObjectListing(objects=objects, next_token=next_token)

    async def presign_url(self, key: str, expires_in: int = 3600) -> str:
        if key not in self._objects:
            raise StorageError(self.name, f"No such key: {key}", key=key)
        return f"{self.base_url}/{key}?X-Amz-Expires={expires_in}"

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        self._objects[key] = (bytes(data), content_type, datetime.now(timezone.utc))
        logger.debug(f"[MEMORY] Stored {key} ({len(data)} bytes)")
        return key

    async def get_object(self, key: str) -> bytes:
        try:
            return self._objects[key][0]
        except KeyError:
            raise StorageError(self.name, f"No such key: {key}", key=key) from None

    @staticmethod
    def _encode_token(offset: int) -> str:
        return base64.urlsafe_b64encode(f"offset:{offset}".encode()).decode()

    def _decode_token(self, token: str) -> int:
        try:
            label, value = base64.urlsafe_b64decode(token.encode()).decode().split(":", 1)
            if label != "offset":
                raise ValueError(label)
            return int(value)
        except ValueError as e:
            raise StorageError(self.name, f"Invalid continuation token: {token}") from e
