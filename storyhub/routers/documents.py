"""Document routes. Mutations require an identity and are gated on ownership by the service layer."""

from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from storyhub.database import get_db
from storyhub.errors import ForbiddenError, InvalidInputError
from storyhub.middleware.auth_middleware import Identity, get_current_identity
from storyhub.schemas.document import DocumentOut, DocumentPatch, DocumentSummary
from storyhub.services.document_service import DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(db: Session = Depends(get_db)) -> DocumentService:
    return DocumentService(db)


@router.post("/createEmptyDoc", response_model=DocumentOut, status_code=201)
def create_empty_document(
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    return service.create_empty(identity.subject)


@router.get("/findDoc/{document_id}", response_model=bool)
def document_exists(document_id: str, service: DocumentService = Depends(get_document_service)):
    return service.exists(document_id)


# registered before /{document_id} so "user" is not read as an id
@router.get("/user", response_model=List[DocumentSummary])
def list_my_documents(
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    return service.list_by_owner(identity.subject)


@router.get("/{document_id}", response_model=DocumentOut)
def get_document(document_id: str, service: DocumentService = Depends(get_document_service)):
    return service.get(document_id)


@router.put("/{document_id}", response_model=DocumentOut)
def update_document(
    document_id: str,
    payload: Any = Body(None),
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return service.update(document_id, identity.subject, DocumentPatch.from_payload(payload))


@router.patch("/{document_id}/publish", response_model=bool)
def publish_document(
    document_id: str,
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    service.publish(document_id, identity.subject)
    return True


@router.patch("/{document_id}/unpublish", response_model=bool)
def unpublish_document(
    document_id: str,
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    service.unpublish(document_id, identity.subject)
    return True


@router.delete("/deleteDoc/{document_id}", response_model=bool)
def delete_document(
    document_id: str,
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    if not service.delete(document_id, identity.subject):
        raise ForbiddenError("No permission to delete this document")
    return True
