"""Filesystem-backed blob store, served as static files under a public URL prefix."""

import logging
import os
import time
from urllib.parse import urlencode

from storyhub.errors import InvalidInputError, StorageError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    def __init__(self, root: str, public_url: str = "/uploads"):
        self.root = os.path.abspath(root)
        self.public_url = public_url.rstrip("/")

    def ensure_root(self) -> None:
        os.makedirs(self.root, exist_ok=True)

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.root, key))
        if not key or os.path.commonpath([self.root, path]) != self.root or path == self.root:
            raise InvalidInputError(f"Invalid storage key '{key}'")
        return path

    def url_for(self, key: str) -> str:
        return f"{self.public_url}/{key.lstrip('/')}"

    def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self._path(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error("Failed to write blob %s: %s", key, e)
            raise StorageError("Failed to store file", e) from e
        logger.info("Stored %s (%d bytes, %s)", key, len(data), content_type)
        return self.url_for(key)

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            os.remove(path)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error("Failed to delete blob %s: %s", key, e)
            raise StorageError("Failed to delete file", e) from e

    def exists(self, key: str) -> bool:
        return os.path.isfile(self._path(key))

    def presign_get(self, key: str, ttl_seconds: int) -> str:
        self._path(key)
        expires = int(time.time()) + int(ttl_seconds)
        return f"{self.url_for(key)}?{urlencode({'expires': expires})}"
