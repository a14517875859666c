"""Pydantic contracts for blog articles."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from storyhub.models.article import ArticleStatus


class ArticleBase(BaseModel):
    user_id: int = Field(validation_alias="userId", serialization_alias="userId")
    title: str = Field(min_length=1, max_length=200)
    status: ArticleStatus = ArticleStatus.DRAFT
    tags: str = ""
    author: str = Field(min_length=1, max_length=100)
    excerpt: str = ""

    model_config = {"populate_by_name": True}


class ArticleCreate(ArticleBase):
    content: str


class ArticleUpdate(BaseModel):
    user_id: Optional[int] = Field(None, validation_alias="userId")
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None
    status: Optional[ArticleStatus] = None
    tags: Optional[str] = None
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    excerpt: Optional[str] = None

    model_config = {"populate_by_name": True}


class ArticleListItem(BaseModel):
    id: int
    user_id: int = Field(alias="userId")
    title: str
    status: ArticleStatus
    tags: Optional[str] = ""
    author: str
    excerpt: Optional[str] = ""
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}


class ArticleOut(ArticleListItem):
    content: str


class ArticleListOut(BaseModel):
    total: int
    data: List[ArticleListItem]
