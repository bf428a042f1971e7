"""
Article catalog API endpoints
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from constants import AvailableLanguages, HTTPStatus
from dependencies import get_articles_service
from dtos.request.article_request import ArticleCreateRequest
from dtos.response.article_response import ArticleResponse
from security import get_current_user
from services.interfaces import IArticlesService
from utils.error_handlers import handle_api_errors

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/articles", response_model=List[ArticleResponse])
@handle_api_errors("Get articles")
def get_articles(
    language: Optional[AvailableLanguages] = Query(None, description="Only articles in this language"),
    service: IArticlesService = Depends(get_articles_service)
):
    """List catalog articles ordered by id."""
    return [ArticleResponse.model_validate(article) for article in service.get_all(language)]


@router.get("/articles/{article_id}", response_model=ArticleResponse)
@handle_api_errors("Get article")
def get_article(article_id: int, service: IArticlesService = Depends(get_articles_service)):
    """
    Get a single catalog article.

    Raises:
        HTTPException: If the article is not found
    """
    return ArticleResponse.model_validate(service.get_by_id(article_id))


@router.post("/articles", response_model=ArticleResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create article")
def create_article(payload: ArticleCreateRequest, service: IArticlesService = Depends(get_articles_service)):
    """Add an article to the catalog."""
    return ArticleResponse.model_validate(service.create(payload))
