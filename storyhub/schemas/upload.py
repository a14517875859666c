"""Pydantic contracts for third-party upload signing."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class CloudinarySignIn(BaseModel):
    params_to_sign: Dict[str, Any] = Field(validation_alias="paramsToSign")


class CloudinarySignOut(BaseModel):
    signature: str
