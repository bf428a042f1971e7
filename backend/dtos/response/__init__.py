"""
Response DTOs

Shapes returned by the API. They are built explicitly from ORM objects so
optional parts, such as the requester, are only exposed when asked for.
"""

from .article_response import ArticleResponse
from .help_request_response import (
    RequesterResponse,
    HelpRequestArticleResponse,
    HelpRequestResponse,
)

__all__ = [
    "ArticleResponse",
    "RequesterResponse",
    "HelpRequestArticleResponse",
    "HelpRequestResponse",
]
