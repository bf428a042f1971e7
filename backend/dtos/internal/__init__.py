"""
Internal DTOs

Commands handed from the API boundary to the service layer. They are fully
resolved and normalized, never parsed from raw client input directly.
"""

from .help_request_filter import HelpRequestFilter, as_value_set

__all__ = ["HelpRequestFilter", "as_value_set"]
