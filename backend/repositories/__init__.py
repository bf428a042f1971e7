"""
Repository layer, the persistence gateway of the backend.

Repositories encapsulate SQLAlchemy queries behind intention-revealing
methods; filters are expressed as composable specifications.
"""

from .base_repository import BaseRepository
from .help_request_repository import HelpRequestRepository
from .article_repository import ArticleRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "HelpRequestRepository",
    "ArticleRepository",
    "UserRepository",
]
