"""Media upload, listing and removal on top of the record store and the object store."""

import logging
import os
import tempfile
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from sqlalchemy.orm import Session

from storyhub.config import Settings
from storyhub.errors import FrameExtractionError, ForbiddenError, InvalidInputError, NotFoundError, StorageError
from storyhub.models.media import Media, MediaStatus, MediaType
from storyhub.repositories.media_repository import MediaRepository
from storyhub.schemas.media import AudioDetail, PublicAudioItem, PublicVideoItem, VideoDetail
from storyhub.services.frame_extractor import PREVIEW_SIZE, THUMBNAIL_SIZE, FrameExtractor
from storyhub.storage.base import BlobStore
from storyhub.utils.helpers import clamp_pagination, infer_content_type, page_offset, split_filename, utcnow
from storyhub.utils.permissions import is_owner

logger = logging.getLogger(__name__)

MEDIA_PAGE_SIZE = 20

DEFAULT_CATEGORIES = {
    MediaType.VIDEO: "Other",
    MediaType.AUDIO: "Audio",
    MediaType.IMAGE: "Image",
}


def format_duration(seconds: Optional[int]) -> str:
    if not seconds:
        return ""
    seconds = int(seconds)
    return f"{seconds // 60}:{seconds % 60:02d}"


def _duration_of(media: Media) -> str:
    meta = media.meta or {}
    return format_duration(meta.get("duration"))


def to_public_video(media: Media) -> PublicVideoItem:
    return PublicVideoItem(
        id=media.id,
        title=media.title,
        description=media.description,
        thumbnail=media.thumbnail,
        duration=_duration_of(media),
        category=media.category or "",
        upload_time=media.created_at,
    )


def to_public_audio(media: Media) -> PublicAudioItem:
    return PublicAudioItem(
        id=media.id,
        title=media.title,
        duration=_duration_of(media),
        upload_time=media.created_at,
    )


def to_video_detail(media: Media) -> VideoDetail:
    return VideoDetail(
        id=media.id,
        title=media.title,
        description=media.description,
        media_url=media.file_url,
        preview=media.preview,
        duration=_duration_of(media),
        upload_time=media.created_at,
        category=media.category or "",
        meta=media.meta,
    )


def to_audio_detail(media: Media) -> AudioDetail:
    return AudioDetail(id=media.id, title=media.title, media_url=media.file_url)


class MediaService:
    def __init__(
        self,
        db: Session,
        blob_store: BlobStore,
        frame_extractor: FrameExtractor,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = MediaRepository(db)
        self.blob_store = blob_store
        self.frame_extractor = frame_extractor
        self.settings = settings
        self.clock = clock

    @staticmethod
    def _object_key(kind: str, filename: str) -> str:
        stem, ext = split_filename(filename)
        return f"{kind}/{stem}-{uuid.uuid4()}{ext}"

    def _check_upload(self, expected: MediaType, filename: str, data: bytes, content_type: Optional[str]) -> str:
        if not filename:
            raise InvalidInputError("Failed to get uploaded file")
        if len(data) > self.settings.MAX_UPLOAD_SIZE:
            raise InvalidInputError(f"File is too large, the limit is {self.settings.MAX_UPLOAD_SIZE} bytes")

        content_type = content_type or infer_content_type(filename)
        if content_type == "application/octet-stream":
            content_type = infer_content_type(filename)
        if not content_type.startswith(f"{expected.value}/"):
            article = "an" if expected.value[0] in "aeiou" else "a"
            raise InvalidInputError(f"File is not {article} {expected.value}")
        return content_type

    def _store(
        self,
        media_type: MediaType,
        uploader_id: str,
        filename: str,
        data: bytes,
        content_type: str,
        title: Optional[str],
        description: Optional[str],
        category: Optional[str],
        preview: Optional[str] = None,
        thumbnail: Optional[str] = None,
        key: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Media:
        if key is None:
            key = self._object_key(media_type.value, filename)
            url = self.blob_store.put(key, data, content_type)

        now = self.clock()
        media = Media(
            id=str(uuid.uuid4()),
            uploader_id=uploader_id,
            title=title or filename,
            description=description or None,
            file_name=filename,
            file_key=key,
            file_url=url,
            file_size=len(data),
            content_type=content_type,
            media_type=media_type.value,
            status=MediaStatus.READY.value,
            preview=preview,
            thumbnail=thumbnail,
            category=category or DEFAULT_CATEGORIES.get(media_type, ""),
            created_at=now,
            updated_at=now,
        )
        self.repo.save(media)
        logger.info(
            "Stored %s %s for %s (%s, %d bytes)",
            media_type.value,
            media.id,
            uploader_id,
            content_type,
            len(data),
        )
        return media

    def upload_video(
        self,
        uploader_id: str,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Media:
        content_type = self._check_upload(MediaType.VIDEO, filename, data, content_type)
        logger.info("Uploading video %s (%d bytes) for %s", filename, len(data), uploader_id)

        key = self._object_key(MediaType.VIDEO.value, filename)
        url = self.blob_store.put(key, data, content_type)
        preview, thumbnail = self._extract_frames(filename, data)

        return self._store(
            MediaType.VIDEO, uploader_id, filename, data, content_type,
            title, description, category,
            preview=preview, thumbnail=thumbnail, key=key, url=url,
        )

    def upload_audio(self, uploader_id: str, filename: str, data: bytes, content_type: Optional[str] = None,
                     title: Optional[str] = None) -> Media:
        content_type = self._check_upload(MediaType.AUDIO, filename, data, content_type)
        return self._store(MediaType.AUDIO, uploader_id, filename, data, content_type, title, None, None)

    def upload_image(self, uploader_id: str, filename: str, data: bytes, content_type: Optional[str] = None,
                     title: Optional[str] = None, description: Optional[str] = None,
                     category: Optional[str] = None) -> Media:
        content_type = self._check_upload(MediaType.IMAGE, filename, data, content_type)
        return self._store(MediaType.IMAGE, uploader_id, filename, data, content_type, title, description, category)

    def _extract_frames(self, filename: str, data: bytes) -> Tuple[Optional[str], Optional[str]]:
        """Store a preview and a thumbnail frame; on any failure the video is kept without them."""
        stem, ext = split_filename(filename)
        try:
            with tempfile.TemporaryDirectory(prefix="storyhub-video-") as workdir:
                video_path = os.path.join(workdir, f"source{ext or '.mp4'}")
                with open(video_path, "wb") as f:
                    f.write(data)

                urls = []
                for label, size in (("preview", PREVIEW_SIZE), ("thumbnail", THUMBNAIL_SIZE)):
                    frame_path = os.path.join(workdir, f"{label}.jpg")
                    self.frame_extractor.extract_frame(
                        video_path, self.settings.VIDEO_FRAME_TIMESTAMP, frame_path, size
                    )
                    with open(frame_path, "rb") as f:
                        frame = f.read()
                    urls.append(self.blob_store.put(self._object_key("image", f"{label}_{stem}.jpg"), frame, "image/jpeg"))
                return urls[0], urls[1]
        except (FrameExtractionError, StorageError, OSError) as exc:
            logger.error("Failed to extract video frames for %s: %s", filename, exc)
            return None, None

    def get(self, media_id: str) -> Media:
        media = self.repo.find(media_id)
        if media is None:
            raise NotFoundError("Media", media_id)
        return media

    def _get_typed(self, media_id: str, media_type: MediaType) -> Media:
        media = self.repo.find(media_id)
        if media is None:
            raise NotFoundError(media_type.value.capitalize(), media_id)
        if media.media_type != media_type.value:
            article = "an" if media_type.value[0] in "aeiou" else "a"
            raise InvalidInputError(f"Media is not {article} {media_type.value}")
        return media

    def get_video(self, media_id: str) -> Media:
        return self._get_typed(media_id, MediaType.VIDEO)

    def get_audio(self, media_id: str) -> Media:
        return self._get_typed(media_id, MediaType.AUDIO)

    def list_videos(self, page: int | None, limit: int | None) -> List[Media]:
        page, limit = clamp_pagination(page, limit, MEDIA_PAGE_SIZE)
        return self.repo.list_ready(MediaType.VIDEO.value, page_offset(page, limit), limit)

    def list_audios(self, page: int | None, limit: int | None) -> List[Media]:
        page, limit = clamp_pagination(page, limit, MEDIA_PAGE_SIZE)
        return self.repo.list_ready(MediaType.AUDIO.value, page_offset(page, limit), limit)

    def presigned_url(self, media_id: str) -> str:
        media = self.get(media_id)
        if not self.blob_store.exists(media.file_key):
            logger.warning("Media %s has no stored object at %s", media_id, media.file_key)
            raise NotFoundError("Media file", media.file_key)
        return self.blob_store.presign_get(media.file_key, self.settings.PRESIGN_TTL_SECONDS)

    def delete(self, media_id: str, caller: str) -> None:
        media = self.get(media_id)
        if not is_owner(media.uploader_id, caller):
            logger.warning(
                "User attempted to delete media that is not their own: media=%s uploader=%s caller=%s",
                media_id,
                media.uploader_id,
                caller,
            )
            raise ForbiddenError("Permission denied")

        file_key = media.file_key
        logger.info("Deleting media %s (%s) for %s", media_id, file_key, caller)
        self.repo.delete(media_id)

        # the record is gone for good at this point; a leftover blob is acceptable
        if file_key:
            try:
                self.blob_store.delete(file_key)
            except Exception as exc:
                logger.error(
                    "Failed to delete media file %s, but record %s was deleted: %s",
                    file_key,
                    media_id,
                    exc,
                )
        logger.info("Media deleted completely: %s", media_id)
