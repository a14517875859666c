"""Record-store repositories over a SQLAlchemy session."""

from storyhub.repositories.document_repository import DocumentRepository
from storyhub.repositories.article_repository import ArticleRepository
from storyhub.repositories.media_repository import MediaRepository

__all__ = ["DocumentRepository", "ArticleRepository", "MediaRepository"]
