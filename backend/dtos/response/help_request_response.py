"""
Help Request Response DTOs
"""

from pydantic import Field
from datetime import datetime
from typing import List, Optional

from constants import HelpRequestStatus
from dtos.api_model import ApiModel
from models import HelpRequest, HelpRequestArticle, User
from .article_response import ArticleResponse


class RequesterResponse(ApiModel):
    """Identifying details of the person asking for help."""

    id: int = Field(description="User id")
    first_name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    zip_code: Optional[str] = Field(None, description="Zip code of the requester")

    @classmethod
    def from_model(cls, user: User) -> "RequesterResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            zip_code=user.zip_code,
        )


class HelpRequestArticleResponse(ApiModel):
    """One requested article with its amount."""

    article_id: int = Field(description="Id of the requested article")
    amount: int = Field(description="Requested quantity")
    article: Optional[ArticleResponse] = Field(None, description="The requested article")

    @classmethod
    def from_model(cls, line: HelpRequestArticle) -> "HelpRequestArticleResponse":
        return cls(
            article_id=line.article_id,
            amount=line.amount,
            article=ArticleResponse.model_validate(line.article) if line.article is not None else None,
        )


class HelpRequestResponse(ApiModel):
    """
    Help request as exposed by the API.

    ``requester`` is only filled when the caller asked for it.
    """

    id: int = Field(description="Auto-incremented id of the help request")
    requester_user_id: int = Field(description="Id of the user who posted the request")
    status: HelpRequestStatus = Field(description="Current status")
    zip_code: str = Field(description="Zip code of the delivery address")
    city: Optional[str] = Field(None, description="City of the delivery address")
    street: Optional[str] = Field(None, description="Street and house number")
    additional_request: Optional[str] = Field(None, description="Free text for needs outside the catalog")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last modification timestamp")
    articles: List[HelpRequestArticleResponse] = Field(default_factory=list, description="Requested articles")
    requester: Optional[RequesterResponse] = Field(None, description="Requester details (includeRequester=true)")

    @classmethod
    def from_model(cls, help_request: HelpRequest, include_requester: bool = False) -> "HelpRequestResponse":
        """
        Build the response from an ORM help request.

        Args:
            help_request: Loaded help request
            include_requester: Attach the requester details

        Returns:
            Response DTO
        """
        requester = None
        if include_requester and help_request.requester is not None:
            requester = RequesterResponse.from_model(help_request.requester)

        return cls(
            id=help_request.id,
            requester_user_id=help_request.requester_user_id,
            status=help_request.status,
            zip_code=help_request.zip_code,
            city=help_request.city,
            street=help_request.street,
            additional_request=help_request.additional_request,
            created_at=help_request.created_at,
            updated_at=help_request.updated_at,
            articles=[HelpRequestArticleResponse.from_model(line) for line in help_request.articles],
            requester=requester,
        )
