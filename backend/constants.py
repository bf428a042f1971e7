"""
Application-wide constants.

This module centralizes the enums and magic strings shared by the
persistence, service and API layers.
"""
from enum import Enum


class HelpRequestStatus(str, Enum):
    """
    Lifecycle state of a help request.

    - OPEN: posted, nobody has picked it up yet
    - ONGOING: a volunteer is working on it
    - COMPLETED: the need has been covered
    """

    OPEN = 'OPEN'
    ONGOING = 'ONGOING'
    COMPLETED = 'COMPLETED'

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class AvailableLanguages(str, Enum):
    """Language tags an article name can be written in."""

    DE = 'de'
    EN = 'en'

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


# Placeholder accepted for the userId filter, resolved to the caller's id
ME_TOKEN = 'me'

ARTICLE_NAME_MAX_LENGTH = 255


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
