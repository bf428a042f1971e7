"""
Request DTOs

Bodies and query parameters accepted by the API. Validation here only
checks shape and types; business rules such as the positive amount floor
are enforced again by the services.
"""

from .help_request_request import (
    HelpRequestArticleLine,
    HelpRequestCreateRequest,
    HelpRequestArticleRequest,
    HelpRequestQueryParams,
)
from .article_request import ArticleCreateRequest

__all__ = [
    "HelpRequestArticleLine",
    "HelpRequestCreateRequest",
    "HelpRequestArticleRequest",
    "HelpRequestQueryParams",
    "ArticleCreateRequest",
]
