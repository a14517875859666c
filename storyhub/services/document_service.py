"""Document domain service: creation, ownership-gated mutation and public listing."""

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Tuple

from sqlalchemy.orm import Session

from storyhub.errors import ForbiddenError, NotFoundError
from storyhub.models.document import Document
from storyhub.repositories.document_repository import DocumentRepository
from storyhub.schemas.document import UNSET, DocumentPatch
from storyhub.utils.helpers import clamp_pagination, page_offset, utcnow
from storyhub.utils.permissions import AccessDecision, authorize

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"
PUBLISHED_PAGE_SIZE = 20


class DocumentService:
    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.repo = DocumentRepository(db)
        self.clock = clock

    def create_empty(self, owner_id: str) -> Document:
        now = self.clock()
        doc = Document(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=DEFAULT_TITLE,
            created_at=now,
            updated_at=now,
            icon_image=None,
            cover_image=None,
            editor_json=None,
            is_public=False,
        )
        self.repo.save(doc)
        logger.info("Created empty document %s for %s", doc.id, owner_id)
        return doc

    def get(self, document_id: str) -> Document:
        # reads are not ownership-gated: any caller holding the id can fetch the document
        doc = self.repo.find(document_id)
        if doc is None:
            raise NotFoundError("Document", document_id)
        return doc

    def exists(self, document_id: str) -> bool:
        return self.repo.exists(document_id)

    def list_by_owner(self, owner_id: str) -> List[Document]:
        return self.repo.list_by_owner(owner_id)

    def _load_for_mutation(self, document_id: str, caller: str, action: str, allow_unowned: bool = False) -> Document:
        doc = self.repo.find(document_id)
        if doc is None:
            logger.info("Cannot %s document %s: not found", action, document_id)
            raise NotFoundError("Document", document_id)

        if allow_unowned and doc.owner_id == "":
            return doc

        if authorize(doc.owner_id, caller) is AccessDecision.DENIED:
            logger.warning(
                "User attempted to %s a document that is not their own: document=%s owner=%s caller=%s",
                action,
                document_id,
                doc.owner_id,
                caller,
            )
            raise ForbiddenError(f"No permission to {action} this document")
        return doc

    def update(self, document_id: str, caller: str, patch: DocumentPatch) -> Document:
        """Apply a sparse patch to a document owned by ``caller``.

        Every slot of the patch is merged independently; slots left UNSET keep
        the stored value and ``None`` clears it. A document stored with an empty
        owner may be claimed once through ``owner_id``. ``updated_at`` is bumped
        even when the patch carries nothing applicable.
        """
        doc = self._load_for_mutation(document_id, caller, "update", allow_unowned=True)

        if patch.title is not UNSET:
            doc.title = patch.title
        if patch.owner_id is not UNSET and doc.owner_id == "":
            doc.owner_id = patch.owner_id
        if patch.icon_image is not UNSET:
            doc.icon_image = patch.icon_image.to_record() if patch.icon_image is not None else None
        if patch.cover_image is not UNSET:
            doc.cover_image = patch.cover_image.to_record() if patch.cover_image is not None else None
        if patch.editor_json is not UNSET:
            doc.editor_json = patch.editor_json

        doc.updated_at = self.clock()
        self.repo.save(doc)
        logger.info("Updated document %s (empty patch: %s)", document_id, patch.is_empty())
        return doc

    def publish(self, document_id: str, caller: str) -> Document:
        return self._set_public(document_id, caller, True)

    def unpublish(self, document_id: str, caller: str) -> Document:
        return self._set_public(document_id, caller, False)

    def _set_public(self, document_id: str, caller: str, is_public: bool) -> Document:
        doc = self._load_for_mutation(document_id, caller, "publish" if is_public else "unpublish")
        doc.is_public = is_public
        doc.updated_at = self.clock()
        self.repo.save(doc)
        return doc

    def delete(self, document_id: str, caller: str) -> bool:
        doc = self.repo.find(document_id)
        if doc is None:
            logger.info("Cannot delete document %s: not found", document_id)
            return False
        if authorize(doc.owner_id, caller) is AccessDecision.DENIED:
            logger.warning(
                "User attempted to delete a document that is not their own: document=%s owner=%s caller=%s",
                document_id,
                doc.owner_id,
                caller,
            )
            return False
        self.repo.delete(document_id)
        logger.info("Deleted document %s", document_id)
        return True

    def list_published(self, page: int | None, page_size: int | None) -> Tuple[List[Document], int, int, int]:
        page, page_size = clamp_pagination(page, page_size, PUBLISHED_PAGE_SIZE)
        docs = self.repo.list_published(page_offset(page, page_size), page_size)
        total = self.repo.count_published()
        return docs, total, page, page_size

    def reassign_owner(self, old_owner_id: str, new_owner_id: str) -> int:
        count = self.repo.reassign_owner(old_owner_id, new_owner_id)
        logger.info("Reassigned %d documents from %s to %s", count, old_owner_id, new_owner_id)
        return count
