"""Persistence for documents. Commits are owned by the repository; callers never touch the session."""

from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storyhub.errors import StorageError
from storyhub.models.document import Document


class DocumentRepository:
    def __init__(self, session: Session):
        self.session = session

    def find(self, document_id: str) -> Optional[Document]:
        try:
            return self.session.get(Document, document_id)
        except SQLAlchemyError as e:
            raise StorageError("Failed to load document", e) from e

    def exists(self, document_id: str) -> bool:
        stmt = select(func.count()).select_from(Document).where(Document.id == document_id)
        try:
            return (self.session.scalar(stmt) or 0) > 0
        except SQLAlchemyError as e:
            raise StorageError("Failed to check document", e) from e

    def save(self, document: Document) -> Document:
        try:
            self.session.add(document)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to save document", e) from e
        return document

    def delete(self, document_id: str) -> None:
        try:
            self.session.query(Document).filter(Document.id == document_id).delete()
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to delete document", e) from e

    def list_by_owner(self, owner_id: str) -> List[Document]:
        stmt = select(Document).where(Document.owner_id == owner_id).order_by(Document.created_at.asc())
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError as e:
            raise StorageError("Failed to list documents", e) from e

    def list_published(self, offset: int, limit: int) -> List[Document]:
        stmt = (
            select(Document)
            .where(Document.is_public.is_(True))
            .order_by(Document.updated_at.desc(), Document.id.asc())
            .offset(offset)
            .limit(limit)
        )
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError as e:
            raise StorageError("Failed to list published documents", e) from e

    def count_published(self) -> int:
        stmt = select(func.count()).select_from(Document).where(Document.is_public.is_(True))
        try:
            return self.session.scalar(stmt) or 0
        except SQLAlchemyError as e:
            raise StorageError("Failed to count published documents", e) from e

    def reassign_owner(self, old_owner_id: str, new_owner_id: str) -> int:
        stmt = (
            update(Document)
            .where(Document.owner_id == old_owner_id)
            .values(owner_id=new_owner_id)
        )
        try:
            result = self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to reassign document owner", e) from e
        return result.rowcount or 0
