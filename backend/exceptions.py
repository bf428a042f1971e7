"""
Custom exception classes for the application.

This module defines domain-specific exceptions raised by the service and
identity layers. The API layer maps them to HTTP status codes in
``utils.error_handlers``.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a referenced record does not exist"""

    def __init__(self, entity: str, entity_id: int | str):
        details = {"entity": entity, "id": entity_id}
        super().__init__(f"{entity} '{entity_id}' not found", details)


class ValidationError(ApplicationError):
    """Raised when validation fails"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class UnauthorizedError(ApplicationError):
    """Raised when the caller identity is missing or cannot be verified"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
