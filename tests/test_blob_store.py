"""Blob store backends and backend selection."""

from unittest import mock

import pytest
from minio.error import S3Error

from storyhub.config import Settings
from storyhub.errors import InvalidInputError, StorageError
from storyhub.storage import LocalBlobStore, S3BlobStore, build_blob_store


def test_local_store_round_trip(tmp_path):
    store = LocalBlobStore(str(tmp_path), "/files/")
    url = store.put("image/a.png", b"png-bytes", "image/png")

    assert url == "/files/image/a.png"
    assert store.exists("image/a.png")
    assert (tmp_path / "image" / "a.png").read_bytes() == b"png-bytes"

    store.delete("image/a.png")
    assert not store.exists("image/a.png")
    store.delete("image/a.png")  # deleting twice is a no-op


def test_local_store_creates_root_lazily(tmp_path):
    root = tmp_path / "absent"
    store = LocalBlobStore(str(root))
    assert not root.exists()

    store.put("image/a.png", b"png", "image/png")
    assert (root / "image" / "a.png").read_bytes() == b"png"

    empty = tmp_path / "empty"
    LocalBlobStore(str(empty)).ensure_root()
    assert empty.is_dir()


def test_local_store_rejects_escaping_keys(tmp_path):
    store = LocalBlobStore(str(tmp_path / "root"))
    for key in ("../outside.txt", "/etc/passwd", ""):
        with pytest.raises(InvalidInputError):
            store.put(key, b"x", "text/plain")


def test_local_presign_adds_expiry(tmp_path):
    store = LocalBlobStore(str(tmp_path))
    store.put("audio/a.mp3", b"x", "audio/mpeg")
    assert store.presign_get("audio/a.mp3", 60).startswith("/uploads/audio/a.mp3?expires=")


def _s3_error(code: str) -> S3Error:
    return S3Error(
        code=code,
        message="message",
        resource="resource",
        request_id="request-id",
        host_id="host-id",
        response=mock.Mock(),
    )


def test_s3_store_put_uses_public_url_and_cache_header():
    client = mock.Mock()
    store = S3BlobStore(client, "bucket", "https://cdn.example.com/")

    url = store.put("video/a.mp4", b"data", "video/mp4")

    assert url == "https://cdn.example.com/video/a.mp4"
    args, kwargs = client.put_object.call_args
    assert args[:2] == ("bucket", "video/a.mp4")
    assert args[3] == 4
    assert kwargs["content_type"] == "video/mp4"
    assert kwargs["metadata"] == {"Cache-Control": "public, max-age=31536000"}


def test_s3_store_wraps_sdk_errors():
    client = mock.Mock()
    client.put_object.side_effect = _s3_error("AccessDenied")
    client.remove_object.side_effect = _s3_error("AccessDenied")
    store = S3BlobStore(client, "bucket", "https://cdn.example.com")

    with pytest.raises(StorageError):
        store.put("k", b"x", "text/plain")
    with pytest.raises(StorageError):
        store.delete("k")


def test_s3_store_exists():
    client = mock.Mock()
    store = S3BlobStore(client, "bucket", "https://cdn.example.com")
    assert store.exists("k") is True

    client.stat_object.side_effect = _s3_error("NoSuchKey")
    assert store.exists("k") is False

    client.stat_object.side_effect = _s3_error("AccessDenied")
    with pytest.raises(StorageError):
        store.exists("k")


def test_s3_store_presign_passes_ttl():
    client = mock.Mock()
    client.presigned_get_object.return_value = "https://signed"
    store = S3BlobStore(client, "bucket", "https://cdn.example.com")

    assert store.presign_get("k", 90) == "https://signed"
    _, kwargs = client.presigned_get_object.call_args
    assert kwargs["expires"].total_seconds() == 90


def test_build_blob_store_selects_backend(tmp_path):
    local = build_blob_store(Settings(STORAGE_BACKEND="local", UPLOAD_DIR=str(tmp_path)))
    assert isinstance(local, LocalBlobStore)

    s3 = build_blob_store(
        Settings(
            STORAGE_BACKEND="s3",
            S3_ENDPOINT="https://account.r2.cloudflarestorage.com",
            S3_ACCESS_KEY_ID="key",
            S3_SECRET_ACCESS_KEY="secret",
            S3_BUCKET="media",
            S3_PUBLIC_URL="https://cdn.example.com",
        )
    )
    assert isinstance(s3, S3BlobStore)
    assert s3.bucket == "media"


def test_build_blob_store_reports_missing_s3_settings():
    with pytest.raises(ValueError, match="S3_BUCKET"):
        build_blob_store(Settings(STORAGE_BACKEND="s3", S3_ENDPOINT="https://x", S3_ACCESS_KEY_ID="k",
                                  S3_SECRET_ACCESS_KEY="s", S3_BUCKET=""))
    with pytest.raises(ValueError):
        build_blob_store(Settings(STORAGE_BACKEND="ftp"))
