"""SQLAlchemy model for uploaded media files (video, audio, image)."""

import enum

from sqlalchemy import BigInteger, Column, DateTime, JSON, String, Text, event

from storyhub.database import Base
from storyhub.utils.helpers import utcnow


class MediaType(str, enum.Enum):
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"
    OTHER = "other"


class MediaStatus(str, enum.Enum):
    UPLOADING = "uploading"
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


VIDEO_CONTENT_TYPES = {"video/mp4", "video/webm", "video/quicktime"}
AUDIO_CONTENT_TYPES = {"audio/mpeg", "audio/wav", "audio/ogg"}
IMAGE_CONTENT_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


def media_type_for(content_type: str | None) -> MediaType:
    if content_type in VIDEO_CONTENT_TYPES:
        return MediaType.VIDEO
    if content_type in AUDIO_CONTENT_TYPES:
        return MediaType.AUDIO
    if content_type in IMAGE_CONTENT_TYPES:
        return MediaType.IMAGE
    return MediaType.OTHER


class Media(Base):
    __tablename__ = "media"

    id = Column(String(36), primary_key=True)
    uploader_id = Column(String(255), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text)
    file_name = Column(String(500), nullable=False)
    file_key = Column(String(1024), nullable=False, unique=True)
    file_url = Column(String(2048), nullable=False)
    file_size = Column(BigInteger, nullable=False, default=0)
    content_type = Column(String(255), nullable=False)
    media_type = Column(String(20), index=True)  # video/audio/image/other
    status = Column(String(20), nullable=False, default=MediaStatus.UPLOADING.value)
    thumbnail = Column(String(2048))
    preview = Column(String(2048))
    meta = Column(JSON)  # {duration, width, height, resolution, bitrate, frameRate, codec, aspectRatio}
    category = Column(String(100), index=True, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


@event.listens_for(Media, "before_insert")
def _derive_media_type(mapper, connection, target: Media):
    if not target.media_type:
        target.media_type = media_type_for(target.content_type).value
