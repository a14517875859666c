"""S3-compatible blob store (Cloudflare R2, MinIO, AWS S3) built on the MinIO client."""

import io
import logging
from datetime import timedelta
from urllib.parse import urlparse

from minio import Minio
from minio.error import S3Error

from storyhub.config import Settings
from storyhub.errors import StorageError

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=31536000"


class S3BlobStore:
    def __init__(self, client: Minio, bucket: str, public_url: str):
        self.client = client
        self.bucket = bucket
        self.public_url = public_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3BlobStore":
        missing = settings.missing_s3_settings()
        if missing:
            raise ValueError(f"S3 settings are incomplete, please set {', '.join(missing)}")

        parsed = urlparse(settings.S3_ENDPOINT)
        endpoint = parsed.netloc or parsed.path
        secure = parsed.scheme == "https" if parsed.scheme else settings.S3_SECURE
        client = Minio(
            endpoint,
            access_key=settings.S3_ACCESS_KEY_ID,
            secret_key=settings.S3_SECRET_ACCESS_KEY,
            secure=secure,
            region=settings.S3_REGION or None,
        )
        public_url = settings.S3_PUBLIC_URL or f"{settings.S3_ENDPOINT.rstrip('/')}/{settings.S3_BUCKET}"
        logger.info("Object storage configured: endpoint=%s bucket=%s", endpoint, settings.S3_BUCKET)
        return cls(client, settings.S3_BUCKET, public_url)

    def put(self, key: str, data: bytes, content_type: str) -> str:
        try:
            self.client.put_object(
                self.bucket,
                key,
                io.BytesIO(data),
                len(data),
                content_type=content_type,
                metadata={"Cache-Control": CACHE_CONTROL},
            )
        except S3Error as e:
            logger.error("Failed to upload %s to bucket %s: %s", key, self.bucket, e)
            raise StorageError("Failed to store file", e) from e

        url = f"{self.public_url}/{key}"
        logger.info("Uploaded %s (%s)", url, content_type)
        return url

    def delete(self, key: str) -> None:
        if not key:
            raise StorageError("Invalid file key")
        try:
            self.client.remove_object(self.bucket, key)
        except S3Error as e:
            logger.error("Failed to delete %s from bucket %s: %s", key, self.bucket, e)
            raise StorageError("Failed to delete file", e) from e
        logger.info("Deleted %s", key)

    def exists(self, key: str) -> bool:
        try:
            self.client.stat_object(self.bucket, key)
        except S3Error as e:
            if e.code in ("NoSuchKey", "NoSuchObject", "NotFound"):
                return False
            raise StorageError("Failed to stat file", e) from e
        return True

    def presign_get(self, key: str, ttl_seconds: int) -> str:
        try:
            return self.client.presigned_get_object(
                self.bucket, key, expires=timedelta(seconds=ttl_seconds)
            )
        except S3Error as e:
            raise StorageError("Failed to generate presigned URL", e) from e
