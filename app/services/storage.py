"""Object storage for vendor form uploads (S3 presigned PUT + public read URL).

The upload path never holds long-lived credentials on the wire: it asks S3 for
a presigned PUT URL valid for ``UPLOAD_URL_EXPIRY_SECONDS`` and streams the
bytes to that URL with httpx.
"""

from __future__ import annotations

import logging
from typing import Optional

import boto3
import httpx
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import ServiceUnavailableError, StorageError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """Interface the upload service writes through."""

    async def put_object(self, key: str, content: bytes, content_type: str) -> str:
        """Store *content* under *key* and return its public URL."""
        raise NotImplementedError


class S3Storage(ObjectStorage):
    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        expires_in: int = 3600,
        timeout: float = 30.0,
        s3_client=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.bucket = bucket
        self.expires_in = expires_in
        self.timeout = timeout
        self._transport = transport
        self._s3 = s3_client or boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    def presign_put(self, key: str, content_type: str) -> str:
        try:
            return self._s3.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=self.expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Could not presign upload for %s: %s", key, exc)
            raise StorageError("Could not obtain an upload URL") from exc

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    async def put_object(self, key: str, content: bytes, content_type: str) -> str:
        upload_url = self.presign_put(key, content_type)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.put(
                    upload_url, content=content, headers={"Content-Type": content_type}
                )
        except httpx.HTTPError as exc:
            logger.error("Upload transfer for %s failed: %s", key, exc)
            raise StorageError("Failed to upload file") from exc

        if response.is_error:
            logger.error(
                "Object store rejected %s: HTTP %d %s", key, response.status_code, response.text[:200]
            )
            raise StorageError("Failed to upload file")

        logger.info("Stored %s (%d bytes) in %s", key, len(content), self.bucket)
        return self.public_url(key)


_storage: Optional[ObjectStorage] = None


def get_storage() -> ObjectStorage:
    """FastAPI dependency returning the configured object store.

    Raises ``ServiceUnavailableError`` when AWS credentials or the bucket are
    not configured.
    """
    global _storage
    if not settings.storage_enabled:
        raise ServiceUnavailableError("File storage is not configured")
    if _storage is None:
        _storage = S3Storage(
            bucket=settings.aws_s3_bucket_name,
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            expires_in=settings.upload_url_expiry_seconds,
        )
    return _storage
