"""Pydantic contracts for media uploads and public media listings."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class MediaModel(BaseModel):
    model_config = {"populate_by_name": True}


class MediaUploadOut(MediaModel):
    id: str
    url: str
    file_name: str = Field(alias="fileName")
    file_size: int = Field(alias="fileSize")
    content_type: str = Field(alias="contentType")
    media_type: str = Field(alias="mediaType")
    category: str
    preview: Optional[str] = None
    thumbnail: Optional[str] = None
    message: str


class PublicVideoItem(MediaModel):
    id: str
    title: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    duration: str = ""
    category: str
    upload_time: datetime = Field(alias="uploadTime")


class PublicAudioItem(MediaModel):
    id: str
    title: str
    duration: str = ""
    upload_time: datetime = Field(alias="uploadTime")


class VideoDetail(MediaModel):
    id: str
    title: str
    description: Optional[str] = None
    media_url: str = Field(alias="mediaUrl")
    preview: Optional[str] = None
    duration: str = ""
    upload_time: datetime = Field(alias="uploadTime")
    category: str
    meta: Optional[Dict[str, Any]] = None


class AudioDetail(MediaModel):
    id: str
    title: str
    media_url: str = Field(alias="mediaUrl")


class MediaUrlOut(MediaModel):
    url: str
    expires_in: int = Field(alias="expiresIn")


class MediaDeleteOut(BaseModel):
    success: bool
    message: str
