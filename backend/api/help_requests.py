"""
Help Requests API endpoints
"""
from fastapi import APIRouter, Depends, Query
from typing import List

from constants import HTTPStatus
from dependencies import get_help_request_filter, get_help_request_or_404, get_help_requests_service
from dtos.internal.help_request_filter import HelpRequestFilter
from dtos.request.help_request_request import HelpRequestArticleRequest, HelpRequestCreateRequest
from dtos.response.help_request_response import HelpRequestResponse
from models import HelpRequest
from security import AuthenticatedUser, get_current_user
from services.interfaces import IHelpRequestsService
from utils.error_handlers import handle_api_errors
import logging

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/help-requests", response_model=List[HelpRequestResponse])
@handle_api_errors("Get help requests")
def get_help_requests(
    help_request_filter: HelpRequestFilter = Depends(get_help_request_filter),
    service: IHelpRequestsService = Depends(get_help_requests_service)
):
    """
    List help requests matching the query filters.

    Query parameters:
    - userId: requester id, or 'me' for the caller
    - excludeUserId: hide requests of this requester
    - zipCode / zipCode[]: one or more zip codes
    - status / status[]: one or more of OPEN, ONGOING, COMPLETED
    - includeRequester: attach requester name and zip code
    """
    help_requests = service.get_all(help_request_filter)
    logger.debug(f"Help request query matched {len(help_requests)} row(s)")
    return [
        HelpRequestResponse.from_model(help_request, help_request_filter.include_requester)
        for help_request in help_requests
    ]


@router.post("/help-requests", response_model=HelpRequestResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create help request")
def create_help_request(
    payload: HelpRequestCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: IHelpRequestsService = Depends(get_help_requests_service)
):
    """
    Create a help request for the authenticated caller.

    Raises:
        HTTPException: 404 for an unknown article, 400 for invalid input
    """
    help_request = service.create(payload, current_user.user_id)
    return HelpRequestResponse.from_model(help_request)


@router.get("/help-requests/{help_request_id}", response_model=HelpRequestResponse)
@handle_api_errors("Get help request")
def get_help_request(
    include_requester: bool = Query(False, alias="includeRequester"),
    help_request: HelpRequest = Depends(get_help_request_or_404)
):
    """Get a single help request with its articles."""
    return HelpRequestResponse.from_model(help_request, include_requester)


@router.put("/help-requests/{help_request_id}", response_model=HelpRequestResponse)
@handle_api_errors("Update help request")
def update_help_request(
    help_request_id: int,
    payload: HelpRequestCreateRequest,
    service: IHelpRequestsService = Depends(get_help_requests_service)
):
    """
    Modify a help request.

    Only fields present in the body change. A present ``articles`` list
    replaces the article set.
    """
    help_request = service.update(help_request_id, payload)
    return HelpRequestResponse.from_model(help_request)


@router.put("/help-requests/{help_request_id}/article/{article_id}", response_model=HelpRequestResponse)
@handle_api_errors("Add or update help request article")
def add_or_update_article(
    article_id: int,
    payload: HelpRequestArticleRequest,
    help_request: HelpRequest = Depends(get_help_request_or_404),
    service: IHelpRequestsService = Depends(get_help_requests_service)
):
    """
    Set the requested amount of an article.

    Adds the article if it is not on the help request yet, otherwise
    overwrites its amount.
    """
    updated = service.add_or_update_article(help_request, article_id, payload)
    return HelpRequestResponse.from_model(updated)


@router.delete("/help-requests/{help_request_id}/article/{article_id}", response_model=HelpRequestResponse)
@handle_api_errors("Remove help request article")
def remove_article(
    article_id: int,
    help_request: HelpRequest = Depends(get_help_request_or_404),
    service: IHelpRequestsService = Depends(get_help_requests_service)
):
    """Remove an article from a help request. Removing an absent article succeeds."""
    updated = service.remove_article(help_request, article_id)
    return HelpRequestResponse.from_model(updated)
