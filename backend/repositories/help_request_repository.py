"""
Help request repository for help-request-specific data access operations.

Owns the association rows (``HelpRequestArticle``) as well, since they are
only ever reached through their help request.
"""

from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy.orm import Session, joinedload

from models import HelpRequest as HelpRequestModel, HelpRequestArticle
from .base_repository import BaseRepository
from .specifications import Specification


class HelpRequestRepository(BaseRepository[HelpRequestModel]):
    """Repository for HelpRequest model operations."""

    def __init__(self, db: Session):
        super().__init__(db, HelpRequestModel)

    def _query(self, include_requester: bool = False):
        query = self.db.query(self.model)
        if include_requester:
            query = query.options(joinedload(self.model.requester))
        return query

    def find_matching(
        self,
        spec: Specification[HelpRequestModel],
        include_requester: bool = False
    ) -> List[HelpRequestModel]:
        """
        Find help requests matching a specification.

        Args:
            spec: Combined filter specification
            include_requester: Eager-load the requesting user

        Returns:
            Matching help requests ordered by id
        """
        return self._query(include_requester).filter(
            spec.to_sql_filter()
        ).order_by(self.model.id).all()

    def get_with_articles(
        self,
        help_request_id: int,
        include_requester: bool = False
    ) -> Optional[HelpRequestModel]:
        """
        Get a help request with a freshly loaded article collection.

        Args:
            help_request_id: Help request id
            include_requester: Eager-load the requesting user

        Returns:
            Help request or None if not found
        """
        return self._query(include_requester).populate_existing().filter(
            self.model.id == help_request_id
        ).first()

    def get_article_line(self, help_request: HelpRequestModel, article_id: int) -> Optional[HelpRequestArticle]:
        """
        Return the association row for (help request, article) if present.
        """
        for line in help_request.articles:
            if line.article_id == article_id:
                return line
        return None

    def upsert_article_line(self, help_request: HelpRequestModel, article_id: int, amount: int) -> HelpRequestArticle:
        """
        Set the requested amount of an article, inserting the row if needed.

        Args:
            help_request: Owning help request
            article_id: Article id (must exist)
            amount: New amount, overwrites any previous value

        Returns:
            The association row
        """
        line = self.get_article_line(help_request, article_id)
        if line is None:
            line = HelpRequestArticle(article_id=article_id, amount=amount)
            help_request.articles.append(line)
        else:
            line.amount = amount
        help_request.updated_at = datetime.utcnow()
        self.db.flush()
        return line

    def replace_article_lines(self, help_request: HelpRequestModel, amounts: Dict[int, int]) -> None:
        """
        Make the association collection match ``amounts`` exactly.

        Listed articles are upserted, every other row is deleted.

        Args:
            help_request: Owning help request
            amounts: Mapping of article id to amount
        """
        for line in list(help_request.articles):
            if line.article_id not in amounts:
                help_request.articles.remove(line)
                help_request.updated_at = datetime.utcnow()
        for article_id, amount in amounts.items():
            self.upsert_article_line(help_request, article_id, amount)
        self.db.flush()

    def remove_article_line(self, help_request: HelpRequestModel, article_id: int) -> bool:
        """
        Delete the association row for (help request, article).

        Returns:
            True if a row was removed, False if there was none
        """
        line = self.get_article_line(help_request, article_id)
        if line is None:
            return False
        help_request.articles.remove(line)
        help_request.updated_at = datetime.utcnow()
        self.db.flush()
        return True
