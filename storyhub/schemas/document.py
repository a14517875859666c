"""Pydantic contracts for documents, plus the sparse patch type used by partial updates."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field

logger = logging.getLogger(__name__)


class ImageRef(BaseModel):
    url: str
    timestamp: int = Field(
        0,
        validation_alias=AliasChoices("timeStamp", "timestamp"),
        serialization_alias="timeStamp",
    )

    def to_record(self) -> Dict[str, Any]:
        return {"url": self.url, "timeStamp": self.timestamp}


class DocumentOut(BaseModel):
    id: str
    owner_id: str = Field(alias="ownerId")
    title: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    icon_image: Optional[ImageRef] = Field(None, alias="iconImage")
    cover_image: Optional[ImageRef] = Field(None, alias="coverImage")
    editor_json: Optional[Dict[str, Any]] = Field(None, alias="editorJson")
    is_public: bool = Field(False, alias="isPublic")

    model_config = {"from_attributes": True, "populate_by_name": True}


class DocumentSummary(BaseModel):
    id: str
    title: str
    cover_image: Optional[ImageRef] = Field(None, alias="coverImage")

    model_config = {"from_attributes": True, "populate_by_name": True}


class DocumentPublicSummary(BaseModel):
    id: str
    owner_id: str = Field(alias="ownerId")
    title: str
    icon_image: Optional[ImageRef] = Field(None, alias="iconImage")
    cover_image: Optional[ImageRef] = Field(None, alias="coverImage")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int


class PublishedDocumentsOut(BaseModel):
    data: List[DocumentPublicSummary]
    meta: PageMeta


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

# Each patch slot is UNSET (key absent), None (explicit null: clear) or a value.
ImagePatch = Union[_Unset, None, ImageRef]
ContentPatch = Union[_Unset, None, Dict[str, Any]]

EDITOR_CONTENT_KEYS = ("editorJson", "editorContent")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _image_from_payload(field: str, value: Any) -> ImagePatch:
    if value is None:
        return None
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        raw = value.get("timeStamp", value.get("timestamp", 0))
        if not _is_number(raw) or not math.isfinite(raw):
            raw = 0
        return ImageRef(url=value["url"], timeStamp=math.floor(raw))
    logger.warning("Ignoring %s patch with unexpected shape %s", field, type(value).__name__)
    return UNSET


@dataclass(frozen=True)
class DocumentPatch:
    title: Union[_Unset, str] = UNSET
    owner_id: Union[_Unset, str] = UNSET
    icon_image: ImagePatch = UNSET
    cover_image: ImagePatch = UNSET
    editor_json: ContentPatch = UNSET

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "DocumentPatch":
        """Classify a raw JSON object into patch slots.

        Keys with values of the wrong type are dropped rather than rejected, so a
        client can always send its full local state and only well-formed fields
        are applied.
        """
        fields: Dict[str, Any] = {}

        if isinstance(payload.get("title"), str):
            fields["title"] = payload["title"]
        if isinstance(payload.get("ownerId"), str):
            fields["owner_id"] = payload["ownerId"]

        for key, attr in (("iconImage", "icon_image"), ("coverImage", "cover_image")):
            if key in payload:
                fields[attr] = _image_from_payload(key, payload[key])

        for key in EDITOR_CONTENT_KEYS:
            if key not in payload:
                continue
            value = payload[key]
            if value is None or isinstance(value, dict):
                fields["editor_json"] = value
            else:
                logger.warning("Ignoring %s patch with unexpected shape %s", key, type(value).__name__)
            break

        return cls(**fields)

    def is_empty(self) -> bool:
        return all(
            getattr(self, name) is UNSET
            for name in ("title", "owner_id", "icon_image", "cover_image", "editor_json")
        )
