"""Unauthenticated routes: the published-document feed and Cloudinary upload signing."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from storyhub.database import get_db
from storyhub.schemas.document import DocumentPublicSummary, PageMeta, PublishedDocumentsOut
from storyhub.schemas.upload import CloudinarySignIn, CloudinarySignOut
from storyhub.services.cloudinary_service import sign_request
from storyhub.services.document_service import DocumentService
from storyhub.utils.helpers import parse_int

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/documents", response_model=PublishedDocumentsOut)
def list_published_documents(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    docs, total, page, limit = DocumentService(db).list_published(parse_int(page), parse_int(limit))
    return PublishedDocumentsOut(
        data=[DocumentPublicSummary.model_validate(doc) for doc in docs],
        meta=PageMeta(total=total, page=page, limit=limit),
    )


@router.post("/sign-cloudinary", response_model=CloudinarySignOut)
def sign_cloudinary_upload(body: CloudinarySignIn, request: Request):
    secret = request.app.state.settings.CLOUDINARY_API_SECRET
    return CloudinarySignOut(signature=sign_request(body.params_to_sign, secret))
