"""User-level operations spanning many records, such as adopting a virtual user's stories after login."""

import logging

from sqlalchemy.orm import Session

from storyhub.errors import InvalidInputError
from storyhub.services.document_service import DocumentService

logger = logging.getLogger(__name__)


def migrate_virtual_user_documents(db: Session, virtual_user_id: str | None, new_owner_id: str) -> int:
    if not virtual_user_id:
        logger.error("Virtual user ID not provided for owner migration")
        raise InvalidInputError("Virtual user ID not provided")
    if virtual_user_id == new_owner_id:
        logger.warning("Attempting to migrate documents to the same user ID: %s", new_owner_id)
        raise InvalidInputError("Virtual user ID and target user ID are the same, no migration needed")

    logger.info("Migrating documents from virtual user %s to %s", virtual_user_id, new_owner_id)
    return DocumentService(db).reassign_owner(virtual_user_id, new_owner_id)
