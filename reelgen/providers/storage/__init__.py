"""
Object storage gateways.
"""
from .base import BaseStorageGateway, ListedObject, ObjectListing
from .s3 import S3StorageGateway
from .memory import InMemoryStorageGateway
from .factory import StorageGatewayFactory, get_storage_gateway

__all__ = [
    "BaseStorageGateway",
    "ListedObject",
    "ObjectListing",
    "S3StorageGateway",
    "InMemoryStorageGateway",
    "StorageGatewayFactory",
    "get_storage_gateway",
]
