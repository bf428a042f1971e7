"""
Article Request DTOs
"""

from pydantic import Field, validator

from constants import AvailableLanguages, ARTICLE_NAME_MAX_LENGTH
from dtos.api_model import ApiModel


class ArticleCreateRequest(ApiModel):
    """Body for adding an article to the catalog."""

    name: str = Field(description="Name of the article, should also contain the unit")
    language: AvailableLanguages = Field(description="Language the name is written in")

    @validator("name")
    def validate_name(cls, v):
        """Ensure the name is present and fits the column."""
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        if len(v) > ARTICLE_NAME_MAX_LENGTH:
            raise ValueError(f"name must be at most {ARTICLE_NAME_MAX_LENGTH} characters")
        return v
