"""SQLAlchemy model for user-owned rich-text documents (stories)."""

from sqlalchemy import Boolean, Column, DateTime, Index, JSON, String

from storyhub.database import Base
from storyhub.utils.helpers import utcnow


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True)
    owner_id = Column(String(255), nullable=False, default="", index=True)
    title = Column(String(500), nullable=False, default="Untitled")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    icon_image = Column(JSON)  # {url, timeStamp}
    cover_image = Column(JSON)  # {url, timeStamp}
    editor_json = Column(JSON)  # editor document tree, stored opaquely
    is_public = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_documents_public_updated", "is_public", "updated_at"),
    )
