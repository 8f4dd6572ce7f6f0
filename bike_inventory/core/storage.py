# bike_inventory/core/storage.py

"""
S3 object storage wrapper.

- One boto3 client per process, built in the application lifespan and
  injected with ``Depends(get_storage)``.
- boto3 is synchronous; every call runs in the threadpool.
- Object references are stored as URLs. ``key_from_location`` turns a stored
  URL back into the object key (decoded path, no leading '/', no bucket
  segment for path-style URLs).
- ``compensating`` removes a fresh upload when the surrounding work fails;
  ``discard`` removes a replaced object after the database commit and queues
  a retry on the ARQ worker when that delete fails.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator, List, Optional, Tuple
from urllib.parse import quote, unquote, urlsplit

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from redis.exceptions import RedisError

from bike_inventory.core.config import Settings, settings
from bike_inventory.core.exceptions import StorageError
from bike_inventory.core.metrics import STORAGE_OPERATIONS

logger = logging.getLogger(__name__)

DELETE_RETRY_TASK = "delete_storage_object_task"


class UploadedObject(BaseModel):
    """An object written to storage by the upload dependency."""
    key: str
    location: str
    presigned_url: str
    content_type: str
    size: int


class ObjectStorage:
    def __init__(
        self,
        client: Any,
        *,
        bucket: str,
        region: str,
        endpoint_url: Optional[str] = None,
        presign_expires: int = 3600,
    ):
        self.client = client
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None
        self.presign_expires = presign_expires
        # ArqRedis pool; set by the lifespan when REDIS_URL is configured
        self.job_queue: Optional[Any] = None

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ObjectStorage":
        client = boto3.client(
            "s3",
            region_name=config.AWS_REGION,
            endpoint_url=config.S3_ENDPOINT_URL,
            aws_access_key_id=config.AWS_ACCESS_KEY_ID.get_secret_value() if config.AWS_ACCESS_KEY_ID else None,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY.get_secret_value() if config.AWS_SECRET_ACCESS_KEY else None,
            config=Config(signature_version="s3v4"),
        )
        return cls(
            client,
            bucket=config.AWS_S3_BUCKET,
            region=config.AWS_REGION,
            endpoint_url=config.S3_ENDPOINT_URL,
            presign_expires=config.PRESIGNED_URL_EXPIRES,
        )

    # =========================================================================
    # Location <-> key
    # =========================================================================
    def location_for(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket}/{quote(key)}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}"

    def key_from_location(self, location: Optional[str]) -> Optional[str]:
        if not location:
            return None
        parts = urlsplit(location)
        key = unquote(parts.path.lstrip("/"))
        # path-style URL: {endpoint}/{bucket}/{key}
        if not parts.netloc.startswith(f"{self.bucket}.") and key.startswith(f"{self.bucket}/"):
            key = key[len(self.bucket) + 1:]
        return key or None

    # =========================================================================
    # Primitive operations
    # =========================================================================
    async def upload(self, key: str, body: bytes, content_type: str) -> str:
        """Writes the object and returns its location URL."""
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            STORAGE_OPERATIONS.labels(operation="upload", outcome="error").inc()
            logger.error("Upload of '%s' failed: %s", key, e)
            raise StorageError("Failed to upload file") from e
        STORAGE_OPERATIONS.labels(operation="upload", outcome="success").inc()
        logger.info("Uploaded object '%s' (%d bytes)", key, len(body))
        return self.location_for(key)

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            STORAGE_OPERATIONS.labels(operation="delete", outcome="error").inc()
            logger.error("Delete of '%s' failed: %s", key, e)
            raise StorageError("Failed to delete file") from e
        STORAGE_OPERATIONS.labels(operation="delete", outcome="success").inc()
        logger.info("Deleted object '%s'", key)

    async def presign(self, key: str, expires_in: Optional[int] = None) -> str:
        try:
            url = await run_in_threadpool(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in or self.presign_expires,
            )
        except (BotoCoreError, ClientError) as e:
            STORAGE_OPERATIONS.labels(operation="presign", outcome="error").inc()
            logger.error("Presign of '%s' failed: %s", key, e)
            raise StorageError("Failed to generate pre-signed URL") from e
        STORAGE_OPERATIONS.labels(operation="presign", outcome="success").inc()
        return url

    async def presign_location(self, location: Optional[str]) -> Optional[str]:
        key = self.key_from_location(location)
        if key is None:
            return None
        return await self.presign(key)

    async def list_objects(self, prefix: str) -> List[Tuple[str, datetime]]:
        """(key, last_modified) for every object under the prefix."""
        def _list() -> List[Tuple[str, datetime]]:
            paginator = self.client.get_paginator("list_objects_v2")
            found: List[Tuple[str, datetime]] = []
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for item in page.get("Contents", []):
                    found.append((item["Key"], item["LastModified"]))
            return found

        try:
            return await run_in_threadpool(_list)
        except (BotoCoreError, ClientError) as e:
            STORAGE_OPERATIONS.labels(operation="list", outcome="error").inc()
            logger.error("Listing of '%s' failed: %s", prefix, e)
            raise StorageError("Failed to list objects") from e

    # =========================================================================
    # Compensation
    # =========================================================================
    @asynccontextmanager
    async def compensating(self, upload: Optional[UploadedObject]) -> AsyncGenerator[None, None]:
        """
        Removes ``upload`` from storage when the wrapped block raises.
        The original error is always re-raised.
        """
        try:
            yield
        except Exception:
            if upload is not None:
                logger.info("Rolling back upload '%s'", upload.key)
                try:
                    await self.delete(upload.key)
                except StorageError:
                    await self._schedule_delete(upload.key)
            raise

    async def discard(self, location: Optional[str]) -> None:
        """
        Deletes a replaced or removed object after its row change was committed.
        A failed delete leaves an orphan: it is logged and a retry is queued.
        """
        key = self.key_from_location(location)
        if key is None:
            return
        try:
            await self.delete(key)
        except StorageError:
            await self._schedule_delete(key)

    async def _schedule_delete(self, key: str) -> None:
        logger.warning("Orphaned object '%s' left in bucket '%s'", key, self.bucket)
        if self.job_queue is None:
            return
        try:
            await self.job_queue.enqueue_job(DELETE_RETRY_TASK, key)
        except (RedisError, OSError) as e:
            logger.error("Could not queue delete retry for '%s': %s", key, e)
        else:
            logger.info("Queued delete retry for '%s'", key)
