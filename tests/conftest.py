import os
import shutil
import tempfile

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from storyhub.config import Settings
from storyhub.database import Base
from storyhub.errors import FrameExtractionError
from storyhub.main import create_app
from storyhub.storage.local import LocalBlobStore

TEST_DB_URL = "sqlite:///./test_storyhub.db"
TEST_CLOUDINARY_SECRET = "test-cloudinary-secret"
TEST_MAX_UPLOAD_SIZE = 64 * 1024


class FakeFrameExtractor:
    """Writes a tiny placeholder JPEG instead of shelling out to ffmpeg."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def extract_frame(self, video_path, timestamp, output_path, size=None):
        self.calls.append((video_path, timestamp, output_path, size))
        if self.fail:
            raise FrameExtractionError("ffmpeg not available")
        with open(output_path, "wb") as f:
            f.write(b"\xff\xd8\xff\xe0fake-jpeg")


upload_root = tempfile.mkdtemp(prefix="storyhub-test-uploads-")

test_settings = Settings(
    DATABASE_URL=TEST_DB_URL,
    UPLOAD_DIR=upload_root,
    CLOUDINARY_API_SECRET=TEST_CLOUDINARY_SECRET,
    MAX_UPLOAD_SIZE=TEST_MAX_UPLOAD_SIZE,
    STORAGE_BACKEND="local",
)
blob_store = LocalBlobStore(upload_root, "/uploads")
app = create_app(test_settings, blob_store=blob_store, frame_extractor=FakeFrameExtractor())
engine = app.state.engine


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_uploads():
    yield
    for entry in os.listdir(upload_root):
        shutil.rmtree(os.path.join(upload_root, entry), ignore_errors=True)


@pytest.fixture
def db():
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def frame_extractor(monkeypatch):
    extractor = FakeFrameExtractor()
    monkeypatch.setattr(app.state, "frame_extractor", extractor)
    return extractor


def virtual_headers(user_id: str) -> dict:
    return {"X-Virtual-User-ID": user_id}


def bearer_token(subject: str, claim: str = "uid", **extra) -> str:
    claims = {claim: subject, **extra}
    return jwt.encode(claims, "any-signing-key", algorithm="HS256")


def bearer_headers(subject: str, claim: str = "uid", **extra) -> dict:
    return {"Authorization": f"Bearer {bearer_token(subject, claim, **extra)}"}


def create_doc(client, user_id: str) -> dict:
    resp = client.post("/documents/createEmptyDoc", headers=virtual_headers(user_id))
    assert resp.status_code == 201, resp.text
    return resp.json()
