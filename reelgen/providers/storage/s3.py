"""
S3 storage gateway.

boto3 is synchronous; every call runs in a worker thread so one slow request
only suspends the task that made it.
"""
import asyncio
import logging
from typing import Optional

from reelgen.config import StorageConfig

from .base import BaseStorageGateway, ListedObject, ObjectListing
from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class S3StorageGateway(BaseStorageGateway):
    """Amazon S3 (or S3-compatible) storage gateway."""

    def __init__(self, storage_config: StorageConfig, client=None):
        self._config = storage_config
        self._client = client

    @property
    def name(self) -> str:
        return "s3"

    @property
    def is_available(self) -> bool:
        return self._config.has_bucket

    @property
    def client(self):
        """Lazily created boto3 S3 client."""
        if self._client is None:
            import boto3
            from botocore.config import Config as BotoConfig

            self._client = boto3.client(
                "s3",
                region_name=self._config.region,
                aws_access_key_id=self._config.aws_access_key_id or None,
                aws_secret_access_key=self._config.aws_secret_access_key or None,
                endpoint_url=self._config.endpoint_url,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    async def list_objects(
        self,
        prefix: str,
        limit: int,
        continuation_token: Optional[str] = None,
    ) -> ObjectListing:
        bucket = self._config.require_bucket()
        params = {"Bucket": bucket, "Prefix": prefix, "MaxKeys": limit}
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        try:
            response = await asyncio.to_thread(self.client.list_objects_v2, **params)
        except Exception as e:
            logger.error(f"[S3] Listing {prefix} failed: {e}")
            raise StorageError(self.name, f"Failed to list objects under {prefix}: {e}") from e

        objects = [
            ListedObject(
                key=item.get("Key", ""),
                last_modified=item.get("LastModified"),
                size=item.get("Size"),
            )
            for item in response.get("Contents", [])
        ]
        logger.debug(f"[S3] Listed {len(objects)} objects under {prefix}")

        return ObjectListing(
            objects=objects,
            next_token=response.get("NextContinuationToken"),
        )

    async def presign_url(self, key: str, expires_in: int = 3600) -> str:
        bucket = self._config.require_bucket()
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except Exception as e:
            raise StorageError(self.name, f"Failed to presign {key}: {e}", key=key) from e

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        bucket = self._config.require_bucket()
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except Exception as e:
            logger.error(f"[S3] Upload failed for key={key}: {e}")
            raise StorageError(self.name, f"Failed to upload {key}: {e}", key=key) from e

        logger.info(f"[S3] Uploaded {key} ({len(data)} bytes)")
        return key

    async def get_object(self, key: str) -> bytes:
        bucket = self._config.require_bucket()
        try:
            response = await asyncio.to_thread(self.client.get_object, Bucket=bucket, Key=key)
            return await asyncio.to_thread(response["Body"].read)
        except Exception as e:
            raise StorageError(self.name, f"Failed to read {key}: {e}", key=key) from e
