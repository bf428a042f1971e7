"""
Article repository for catalog data access operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from constants import AvailableLanguages
from models import Article as ArticleModel
from .base_repository import BaseRepository
from .specifications import Specification, MatchAllSpecification


class ArticlesByLanguageSpec(Specification[ArticleModel]):
    """Articles written in a specific language."""

    def __init__(self, language: AvailableLanguages):
        self.language = AvailableLanguages(language)

    def is_satisfied_by(self, article: ArticleModel) -> bool:
        return AvailableLanguages(article.language) == self.language

    def to_sql_filter(self):
        return ArticleModel.language == self.language


class ArticleRepository(BaseRepository[ArticleModel]):
    """Repository for Article model operations."""

    def __init__(self, db: Session):
        super().__init__(db, ArticleModel)

    def list_articles(self, language: Optional[AvailableLanguages] = None) -> List[ArticleModel]:
        """
        List catalog articles ordered by id.

        Args:
            language: Only return articles in this language

        Returns:
            List of articles
        """
        spec = ArticlesByLanguageSpec(language) if language else MatchAllSpecification()
        return self.find(spec)

    def find_missing_ids(self, article_ids: List[int]) -> List[int]:
        """
        Return the ids from ``article_ids`` that have no article row.

        Args:
            article_ids: Ids to check

        Returns:
            Unknown ids in input order
        """
        if not article_ids:
            return []
        known = {
            row.id for row in self.db.query(self.model.id).filter(
                self.model.id.in_(article_ids)
            ).all()
        }
        return [article_id for article_id in article_ids if article_id not in known]
