"""Blog article service. Operations are passthroughs without ownership checks."""

from typing import List, Tuple

from sqlalchemy.orm import Session

from storyhub.errors import NotFoundError
from storyhub.models.article import Article
from storyhub.repositories.article_repository import ArticleRepository
from storyhub.schemas.article import ArticleCreate, ArticleUpdate
from storyhub.utils.helpers import clamp_pagination, page_offset

ARTICLE_PAGE_SIZE = 10


class ArticleService:
    def __init__(self, db: Session):
        self.repo = ArticleRepository(db)

    def create(self, data: ArticleCreate) -> Article:
        article = Article(**data.model_dump())
        article.status = int(data.status)
        return self.repo.save(article)

    def get(self, article_id: int) -> Article:
        article = self.repo.find(article_id)
        if article is None:
            raise NotFoundError("Article", str(article_id))
        return article

    def update(self, article_id: int, data: ArticleUpdate) -> Article:
        article = self.get(article_id)
        for k, v in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(article, k, int(v) if k == "status" else v)
        return self.repo.save(article)

    def delete(self, article_id: int) -> None:
        self.repo.delete(self.get(article_id))

    def list(self, page: int | None, page_size: int | None) -> Tuple[List[Article], int]:
        page, page_size = clamp_pagination(page, page_size, ARTICLE_PAGE_SIZE)
        return self.repo.list(page_offset(page, page_size), page_size)
