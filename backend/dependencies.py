"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating service instances and
for turning raw request input (query strings, path ids) into validated
objects, so route handlers only deal with domain types.
"""

from typing import List, Optional
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from fastapi import Depends, HTTPException, Path, Query

from constants import HTTPStatus
from database import get_db
from dtos.internal.help_request_filter import HelpRequestFilter
from dtos.request.help_request_request import HelpRequestQueryParams
from models import HelpRequest
from security import AuthenticatedUser, get_current_user
from services.articles_service import ArticlesService
from services.help_requests_service import HelpRequestsService
from services.interfaces import IArticlesService, IHelpRequestsService
from utils.error_handlers import to_http_exception


def get_help_requests_service(db: Session = Depends(get_db)) -> IHelpRequestsService:
    """
    Factory function for creating HelpRequestsService instances.

    Args:
        db: Database session (injected)

    Returns:
        IHelpRequestsService: Help requests service implementation
    """
    return HelpRequestsService(db)


def get_articles_service(db: Session = Depends(get_db)) -> IArticlesService:
    """
    Factory function for creating ArticlesService instances.

    Args:
        db: Database session (injected)

    Returns:
        IArticlesService: Articles service implementation
    """
    return ArticlesService(db)


def _merge(*groups: Optional[List[str]]) -> Optional[List[str]]:
    merged = [value for group in groups if group for value in group]
    return merged or None


def get_help_request_filter(
    user_id: Optional[str] = Query(None, alias="userId", description="Requester id or 'me'"),
    exclude_user_id: Optional[str] = Query(None, alias="excludeUserId"),
    zip_code: Optional[List[str]] = Query(None, alias="zipCode"),
    zip_code_brackets: Optional[List[str]] = Query(None, alias="zipCode[]", include_in_schema=False),
    status: Optional[List[str]] = Query(None, alias="status"),
    status_brackets: Optional[List[str]] = Query(None, alias="status[]", include_in_schema=False),
    include_requester: bool = Query(False, alias="includeRequester"),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> HelpRequestFilter:
    """
    Build the normalized help request filter from the query string.

    ``zipCode=1&zipCode=2`` and ``zipCode[]=1&zipCode[]=2`` are both
    accepted, and a single value is the same as a one-element list.
    ``userId=me`` resolves to the authenticated caller.

    Raises:
        HTTPException: 400 for a malformed userId or an unknown status
    """
    try:
        params = HelpRequestQueryParams(
            user_id=user_id,
            exclude_user_id=exclude_user_id,
            zip_code=_merge(zip_code, zip_code_brackets),
            status=_merge(status, status_brackets),
            include_requester=include_requester,
        )
    except PydanticValidationError as e:
        messages = "; ".join(error["msg"] for error in e.errors())
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=f"Invalid filter: {messages}")
    return params.to_filter(current_user.user_id)


def get_help_request_or_404(
    help_request_id: int = Path(..., description="Help request id"),
    service: IHelpRequestsService = Depends(get_help_requests_service),
) -> HelpRequest:
    """
    Resolve the ``{help_request_id}`` path parameter into a loaded help request.

    Raises:
        HTTPException: 404 when no help request has this id
    """
    try:
        return service.get_by_id(help_request_id)
    except Exception as e:
        raise to_http_exception("Get help request", e) from e
