"""
Help Request Request DTOs

DTOs for help-request-related API requests.
"""

from pydantic import Field, validator
from typing import List, Optional, Union

from constants import HelpRequestStatus, ME_TOKEN
from dtos.api_model import ApiModel
from dtos.internal.help_request_filter import HelpRequestFilter, as_value_set


class HelpRequestArticleLine(ApiModel):
    """One requested article inside a create/update body."""

    article_id: int = Field(description="Id of the requested article")
    amount: int = Field(description="Requested quantity, must be positive")


class HelpRequestCreateRequest(ApiModel):
    """
    Body for creating or modifying a help request.

    On update only the fields present in the body are applied. When
    ``articles`` is present it replaces the whole article list.
    """

    status: Optional[HelpRequestStatus] = Field(None, description="Status, defaults to OPEN on create")
    zip_code: Optional[str] = Field(None, description="Zip code of the delivery address")
    city: Optional[str] = Field(None, description="City of the delivery address")
    street: Optional[str] = Field(None, description="Street and house number")
    additional_request: Optional[str] = Field(None, description="Free text for needs outside the catalog")
    articles: Optional[List[HelpRequestArticleLine]] = Field(None, description="Requested articles")

    @validator("zip_code")
    def validate_zip_code(cls, v):
        """Strip whitespace and reject blank zip codes."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("zipCode must not be empty")
        return v

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "zipCode": "10115",
                "status": "OPEN",
                "articles": [{"articleId": 7, "amount": 3}]
            }
        }


class HelpRequestArticleRequest(ApiModel):
    """Body for setting the amount of one article on a help request."""

    amount: int = Field(description="Requested quantity, must be positive")


class HelpRequestQueryParams(ApiModel):
    """
    Raw filter parameters of ``GET /help-requests``.

    ``zip_code`` and ``status`` arrive either as a bare string (one value
    selected) or as a list; both are normalized to a tuple.
    """

    user_id: Optional[Union[int, str]] = Field(None, description="Requester id or 'me'")
    exclude_user_id: Optional[int] = Field(None, description="Hide requests of this requester")
    zip_code: Optional[Union[str, List[str]]] = Field(None, description="One or more zip codes")
    status: Optional[Union[str, List[str]]] = Field(None, description="One or more statuses")
    include_requester: bool = Field(False, description="Attach requester details to each result")

    @validator("user_id", pre=True)
    def validate_user_id(cls, v):
        """Accept an integer id or the 'me' placeholder."""
        if v is None or v == ME_TOKEN:
            return v
        try:
            return int(v)
        except (TypeError, ValueError):
            raise ValueError(f"userId must be an integer or '{ME_TOKEN}'")

    @validator("zip_code", pre=True)
    def normalize_zip_code(cls, v):
        """Turn a bare string into a single-element list."""
        values = as_value_set(v)
        return list(values) if values else None

    @validator("status", pre=True)
    def normalize_status(cls, v):
        """Turn a bare string into a single-element list and check values."""
        values = as_value_set(v)
        if not values:
            return None
        unknown = [value for value in values if value not in HelpRequestStatus.values()]
        if unknown:
            raise ValueError(
                f"Unknown status {', '.join(unknown)}; expected one of {', '.join(HelpRequestStatus.values())}"
            )
        return list(values)

    def to_filter(self, caller_user_id: int) -> HelpRequestFilter:
        """
        Resolve the 'me' placeholder and build the internal filter.

        Args:
            caller_user_id: Id of the authenticated caller

        Returns:
            Normalized filter command
        """
        user_id = caller_user_id if self.user_id == ME_TOKEN else self.user_id
        return HelpRequestFilter(
            user_id=user_id,
            exclude_user_id=self.exclude_user_id,
            zip_codes=self.zip_code,
            statuses=self.status,
            include_requester=self.include_requester,
        )
