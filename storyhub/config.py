"""Centralised application settings loaded from environment variables."""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./storyhub.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3030"]

    # Uploads
    MAX_UPLOAD_SIZE: int = 500 * 1024 * 1024  # 500 MB
    STORAGE_BACKEND: str = "local"  # local/s3
    UPLOAD_DIR: str = "uploads"
    LOCAL_PUBLIC_URL: str = "/uploads"

    # S3-compatible object storage (R2, MinIO, S3)
    S3_ENDPOINT: str = ""
    S3_ACCESS_KEY_ID: str = ""
    S3_SECRET_ACCESS_KEY: str = ""
    S3_BUCKET: str = ""
    S3_PUBLIC_URL: str = ""
    S3_SECURE: bool = True
    S3_REGION: str = "auto"
    PRESIGN_TTL_SECONDS: int = 3600

    # Cloudinary direct-upload signing
    CLOUDINARY_API_SECRET: str = ""

    # Video frame extraction
    FFMPEG_BINARY: str = "ffmpeg"
    VIDEO_FRAME_TIMESTAMP: str = "00:00:01"

    def missing_s3_settings(self) -> List[str]:
        required = {
            "S3_ENDPOINT": self.S3_ENDPOINT,
            "S3_ACCESS_KEY_ID": self.S3_ACCESS_KEY_ID,
            "S3_SECRET_ACCESS_KEY": self.S3_SECRET_ACCESS_KEY,
            "S3_BUCKET": self.S3_BUCKET,
        }
        return [name for name, value in required.items() if not str(value or "").strip()]

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")
        extra = "ignore"


settings = Settings()
