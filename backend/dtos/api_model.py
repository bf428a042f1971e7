"""
Shared base for API-facing DTOs.

The wire format uses camelCase names (``zipCode``, ``articleId``) while the
Python side keeps snake_case attributes.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base DTO with camelCase aliases, populated by name or alias."""

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
