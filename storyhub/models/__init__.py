"""SQLAlchemy model package; importing it registers every table on the metadata."""

from storyhub.models.document import Document
from storyhub.models.article import Article, ArticleStatus
from storyhub.models.media import Media, MediaStatus, MediaType

__all__ = [
    "Document",
    "Article", "ArticleStatus",
    "Media", "MediaStatus", "MediaType",
]
