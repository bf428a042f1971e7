"""
Structured Logging Utilities

Request-scoped logging context. The identity dependency stores the caller
id here, and every ``StructuredLogger`` message emitted while handling that
request carries it.
"""

import logging
from typing import Any, Dict, Optional
from contextvars import ContextVar


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    The merged context is attached to the record as ``extra`` and appended
    to the message as ``key=value`` pairs so plain formatters show it too.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Article added", extra={"help_request_id": 3, "article_id": 7})
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Merge the request context with per-call ``extra``.

        Args:
            extra: Additional context dict

        Returns:
            Merged context dict
        """
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    @staticmethod
    def _render(message: str, context: Dict[str, Any]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{message} [{pairs}]"

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]], exc_info: bool = False):
        context = self._add_context(extra)
        self.logger.log(level, self._render(message, context), extra={"context": context}, exc_info=exc_info)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with structured context."""
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with structured context."""
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with structured context."""
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error message with structured context."""
        self._log(logging.ERROR, message, extra, exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request.

    Args:
        **kwargs: Key-value pairs to add to context

    Example:
        set_logging_context(user_id=42)
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)
