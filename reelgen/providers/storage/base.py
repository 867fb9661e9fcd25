"""
Base class for object storage gateways.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class ListedObject:
    """One entry of an object store listing."""
    key: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None


@dataclass
class ObjectListing:
    """A page of an object store listing plus its continuation token."""
    objects: List[ListedObject] = field(default_factory=list)
    next_token: Optional[str] = None


class BaseStorageGateway(ABC):
    """Abstract base class for object storage gateways."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available."""
        pass

    @abstractmethod
    async def list_objects(
        self,
        prefix: str,
        limit: int,
        continuation_token: Optional[str] = None,
    ) -> ObjectListing:
        """
        List up to `limit` objects under `prefix`.

        Args:
            prefix: Key prefix, e.g. "reels/"
            limit: Maximum number of keys to return
            continuation_token: Opaque token from a previous listing

        Returns:
            ObjectListing with objects in key order and the next token, if any
        """
        pass

    @abstractmethod
    async def presign_url(self, key: str, expires_in: int = 3600) -> str:
        """Issue a time-limited read URL for one object."""
        pass

    @abstractmethod
    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under `key`. Returns the key."""
        pass

    @abstractmethod
    async def get_object(self, key: str) -> bytes:
        """Read an object's bytes."""
        pass
