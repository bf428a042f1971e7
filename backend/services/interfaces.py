"""
Service Interfaces

Abstract base classes for the service layer. Routes depend on these, and
``dependencies.py`` decides which implementation is injected.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from constants import AvailableLanguages
from dtos.internal.help_request_filter import HelpRequestFilter
from dtos.request.article_request import ArticleCreateRequest
from dtos.request.help_request_request import HelpRequestArticleRequest, HelpRequestCreateRequest
from models import Article, HelpRequest


class IHelpRequestsService(ABC):
    """
    Abstract interface for help request management.
    """

    @abstractmethod
    def get_all(self, help_request_filter: HelpRequestFilter) -> List[HelpRequest]:
        """
        List help requests matching a filter.

        Args:
            help_request_filter: Normalized filter, 'me' already resolved

        Returns:
            Matching help requests ordered by id
        """
        pass

    @abstractmethod
    def get_by_id(self, help_request_id: int, include_requester: bool = False) -> HelpRequest:
        """
        Get a single help request.

        Raises:
            NotFoundError: If the help request does not exist
        """
        pass

    @abstractmethod
    def create(self, payload: HelpRequestCreateRequest, requester_user_id: int) -> HelpRequest:
        """
        Create a help request owned by ``requester_user_id``.

        Raises:
            NotFoundError: Unknown requester or article
            ValidationError: Missing zip code or non-positive amount
        """
        pass

    @abstractmethod
    def update(self, help_request_id: int, payload: HelpRequestCreateRequest) -> HelpRequest:
        """
        Replace the fields present in ``payload``.

        Raises:
            NotFoundError: Unknown help request or article
            ValidationError: Non-positive amount
        """
        pass

    @abstractmethod
    def add_or_update_article(
        self,
        help_request: HelpRequest,
        article_id: int,
        payload: HelpRequestArticleRequest
    ) -> HelpRequest:
        """
        Set the amount of an article on a help request (upsert).

        Raises:
            NotFoundError: Unknown article
            ValidationError: Non-positive amount
        """
        pass

    @abstractmethod
    def remove_article(self, help_request: HelpRequest, article_id: int) -> HelpRequest:
        """
        Remove an article from a help request. Removing an absent article is a no-op.
        """
        pass


class IArticlesService(ABC):
    """
    Abstract interface for the article catalog.
    """

    @abstractmethod
    def get_all(self, language: Optional[AvailableLanguages] = None) -> List[Article]:
        """List catalog articles, optionally in one language."""
        pass

    @abstractmethod
    def get_by_id(self, article_id: int) -> Article:
        """
        Get a single article.

        Raises:
            NotFoundError: If the article does not exist
        """
        pass

    @abstractmethod
    def create(self, payload: ArticleCreateRequest) -> Article:
        """Add an article to the catalog."""
        pass
