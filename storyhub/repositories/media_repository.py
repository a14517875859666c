"""Persistence for media records."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storyhub.errors import StorageError
from storyhub.models.media import Media, MediaStatus


class MediaRepository:
    def __init__(self, session: Session):
        self.session = session

    def find(self, media_id: str) -> Optional[Media]:
        try:
            return self.session.get(Media, media_id)
        except SQLAlchemyError as e:
            raise StorageError("Failed to load media", e) from e

    def save(self, media: Media) -> Media:
        try:
            self.session.add(media)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to save media", e) from e
        return media

    def delete(self, media_id: str) -> None:
        # the row is committed on its own; blob cleanup happens after commit
        try:
            self.session.query(Media).filter(Media.id == media_id).delete()
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to delete media record", e) from e

    def list_ready(self, media_type: str, offset: int, limit: int) -> List[Media]:
        stmt = (
            select(Media)
            .where(Media.media_type == media_type, Media.status == MediaStatus.READY.value)
            .order_by(Media.created_at.desc(), Media.id.asc())
            .offset(offset)
            .limit(limit)
        )
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError as e:
            raise StorageError("Failed to list media", e) from e
