"""Storage backend contract and factory."""

from typing import Protocol

from storyhub.config import Settings


class BlobStore(Protocol):
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key`` and return its public URL."""

    def delete(self, key: str) -> None:
        ...

    def exists(self, key: str) -> bool:
        ...

    def presign_get(self, key: str, ttl_seconds: int) -> str:
        ...


def build_blob_store(settings: Settings) -> BlobStore:
    backend = str(settings.STORAGE_BACKEND or "local").strip().lower()
    if backend == "s3":
        from storyhub.storage.s3 import S3BlobStore

        return S3BlobStore.from_settings(settings)
    if backend == "local":
        from storyhub.storage.local import LocalBlobStore

        return LocalBlobStore(settings.UPLOAD_DIR, settings.LOCAL_PUBLIC_URL)
    raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}' (expected 'local' or 's3')")
