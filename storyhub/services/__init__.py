"""Service layer: domain operations over repositories and external collaborators."""

from storyhub.services.document_service import DocumentService
from storyhub.services.article_service import ArticleService
from storyhub.services.media_service import MediaService

__all__ = ["DocumentService", "ArticleService", "MediaService"]
