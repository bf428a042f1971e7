"""
Utility functions and decorators shared by the API and service layers.
"""

from .error_handlers import handle_api_errors, to_http_exception
from .logging_utils import StructuredLogger, set_logging_context

__all__ = ["handle_api_errors", "to_http_exception", "StructuredLogger", "set_logging_context"]
