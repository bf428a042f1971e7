"""
Article Response DTOs
"""

from pydantic import Field

from constants import AvailableLanguages
from dtos.api_model import ApiModel


class ArticleResponse(ApiModel):
    """Catalog article as exposed by the API."""

    id: int = Field(description="Auto-incremented id of the article")
    name: str = Field(description="Name of the article, should also contain the unit")
    language: AvailableLanguages = Field(description="Language key of the name")
