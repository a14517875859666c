"""Object storage backends for uploaded media."""

from storyhub.storage.base import BlobStore, build_blob_store
from storyhub.storage.local import LocalBlobStore
from storyhub.storage.s3 import S3BlobStore

__all__ = ["BlobStore", "build_blob_store", "LocalBlobStore", "S3BlobStore"]
