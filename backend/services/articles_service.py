"""
Articles Service

Read and create operations for the article catalog.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from constants import AvailableLanguages
from dtos.request.article_request import ArticleCreateRequest
from exceptions import NotFoundError
from models import Article
from repositories.article_repository import ArticleRepository
from services.interfaces import IArticlesService

logger = logging.getLogger(__name__)


class ArticlesService(IArticlesService):
    """Service for article catalog business logic."""

    def __init__(self, db: Session):
        self.db = db
        self.article_repo = ArticleRepository(db)

    def get_all(self, language: Optional[AvailableLanguages] = None) -> List[Article]:
        return self.article_repo.list_articles(language)

    def get_by_id(self, article_id: int) -> Article:
        article = self.article_repo.get_by_id(article_id)
        if article is None:
            raise NotFoundError("Article", article_id)
        return article

    def create(self, payload: ArticleCreateRequest) -> Article:
        article = Article(name=payload.name, language=payload.language)
        try:
            self.article_repo.create(article)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(article)
        logger.info(f"Created article {article.id} ({article.language.value}): {article.name}")
        return article
