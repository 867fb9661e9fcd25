"""
Storage gateway factory.
"""
import logging
from typing import Literal, Optional

from reelgen.config import StorageConfig

from .base import BaseStorageGateway
from .memory import InMemoryStorageGateway
from .s3 import S3StorageGateway

logger = logging.getLogger(__name__)


ProviderType = Literal["auto", "s3", "memory"]


class StorageGatewayFactory:
    """Factory for creating storage gateways."""

    @classmethod
    def create(
        cls,
        storage_config: StorageConfig,
        provider: ProviderType = "auto",
    ) -> BaseStorageGateway:
        if provider == "s3":
            return S3StorageGateway(storage_config)
        if provider == "memory":
            return InMemoryStorageGateway()
        return cls._create_auto(storage_config)

    @classmethod
    def _create_auto(cls, storage_config: StorageConfig) -> BaseStorageGateway:
        gateway = S3StorageGateway(storage_config)
        if gateway.is_available:
            return gateway
        logger.warning("[STORAGE] No bucket configured - using in-memory storage")
        return InMemoryStorageGateway()


def get_storage_gateway(
    storage_config: StorageConfig,
    provider: Optional[str] = "auto",
) -> BaseStorageGateway:
    """Get a storage gateway for the given configuration."""
    return StorageGatewayFactory.create(storage_config, provider or "auto")
