"""Blog article routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storyhub.database import get_db
from storyhub.schemas.article import ArticleCreate, ArticleListItem, ArticleListOut, ArticleOut, ArticleUpdate
from storyhub.services.article_service import ArticleService
from storyhub.utils.helpers import parse_int

router = APIRouter(prefix="/api/articles", tags=["articles"])


def get_article_service(db: Session = Depends(get_db)) -> ArticleService:
    return ArticleService(db)


@router.post("", response_model=ArticleOut, status_code=201)
def create_article(data: ArticleCreate, service: ArticleService = Depends(get_article_service)):
    return service.create(data)


@router.get("", response_model=ArticleListOut)
def list_articles(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
    service: ArticleService = Depends(get_article_service),
):
    rows, total = service.list(parse_int(page), parse_int(page_size))
    return ArticleListOut(total=total, data=[ArticleListItem.model_validate(a) for a in rows])


@router.get("/{article_id}", response_model=ArticleOut)
def get_article(article_id: int, service: ArticleService = Depends(get_article_service)):
    return service.get(article_id)


@router.put("/{article_id}", response_model=ArticleOut)
def update_article(article_id: int, data: ArticleUpdate, service: ArticleService = Depends(get_article_service)):
    return service.update(article_id, data)


@router.delete("/{article_id}")
def delete_article(article_id: int, service: ArticleService = Depends(get_article_service)):
    service.delete(article_id)
    return {"message": "Article deleted successfully"}
