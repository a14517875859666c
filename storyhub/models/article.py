"""SQLAlchemy model for blog articles."""

import enum

from sqlalchemy import Column, DateTime, Integer, String, Text

from storyhub.database import Base
from storyhub.utils.helpers import utcnow


class ArticleStatus(enum.IntEnum):
    DRAFT = 0
    PUBLISHED = 1


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    status = Column(Integer, nullable=False, default=int(ArticleStatus.DRAFT))
    tags = Column(String(200), default="")
    author = Column(String(100), nullable=False)
    excerpt = Column(Text, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
