"""User routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from storyhub.database import get_db
from storyhub.middleware.auth_middleware import VIRTUAL_USER_HEADER, Identity, get_current_identity
from storyhub.schemas.user import OwnerMigrationOut
from storyhub.services.user_service import migrate_virtual_user_documents

router = APIRouter(tags=["users"])


@router.put("/update-stories-user", response_model=OwnerMigrationOut)
def update_stories_user(
    x_virtual_user_id: Optional[str] = Header(None, alias=VIRTUAL_USER_HEADER),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    count = migrate_virtual_user_documents(db, x_virtual_user_id, identity.subject)
    return OwnerMigrationOut(
        success=True,
        message=f"Migrated {count} stories to user {identity.subject}",
        count=count,
    )
