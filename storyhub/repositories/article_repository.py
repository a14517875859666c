"""Persistence for blog articles."""

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storyhub.errors import StorageError
from storyhub.models.article import Article


class ArticleRepository:
    def __init__(self, session: Session):
        self.session = session

    def find(self, article_id: int) -> Optional[Article]:
        try:
            return self.session.get(Article, article_id)
        except SQLAlchemyError as e:
            raise StorageError("Failed to load article", e) from e

    def save(self, article: Article) -> Article:
        try:
            self.session.add(article)
            self.session.commit()
            self.session.refresh(article)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to save article", e) from e
        return article

    def delete(self, article: Article) -> None:
        try:
            self.session.delete(article)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to delete article", e) from e

    def list(self, offset: int, limit: int) -> Tuple[List[Article], int]:
        # no explicit ordering exists upstream; primary key ascending keeps pages stable
        try:
            total = self.session.scalar(select(func.count()).select_from(Article)) or 0
            rows = self.session.scalars(
                select(Article).order_by(Article.id.asc()).offset(offset).limit(limit)
            )
            return list(rows), total
        except SQLAlchemyError as e:
            raise StorageError("Failed to list articles", e) from e
