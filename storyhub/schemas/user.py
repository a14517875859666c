"""Pydantic contracts for user-level operations."""

from pydantic import BaseModel


class OwnerMigrationOut(BaseModel):
    success: bool
    message: str
    count: int
