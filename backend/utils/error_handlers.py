"""
Error handling decorators and utilities for API endpoints.

Services raise typed ``ApplicationError`` subclasses; this module maps them
to HTTP responses in one place so endpoints stay free of try/except blocks.
"""

import inspect
from functools import wraps
from typing import Callable
from fastapi import HTTPException
import logging

from constants import HTTPStatus
from exceptions import (
    NotFoundError,
    ValidationError,
    UnauthorizedError,
    DatabaseError,
    ApplicationError
)

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Convert an exception raised by the service layer into an HTTPException.

    Args:
        operation_name: Human-readable name of the operation
        error: Raised exception

    Returns:
        HTTPException carrying the mapped status code
    """
    if isinstance(error, NotFoundError):
        logger.warning(f"{operation_name} - Not found: {error.message}")
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=error.message)
    if isinstance(error, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, UnauthorizedError):
        logger.warning(f"{operation_name} - Unauthorized: {error.message}")
        return HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=error.message,
            headers={"WWW-Authenticate": "Bearer"}
        )
    if isinstance(error, DatabaseError):
        logger.error(f"{operation_name} - Database error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Database operation failed: {error.message}"
        )
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"{operation_name} failed: {error.message}"
        )
    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Get help request")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.get("/help-requests/{help_request_id}")
        @handle_api_errors("Get help request")
        def get_help_request(...):
            return service.get_by_id(help_request_id)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        # Return appropriate wrapper based on whether the function is async
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
