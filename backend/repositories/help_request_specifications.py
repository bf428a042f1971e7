"""
Help Request Specifications

Concrete specifications for querying help requests, and the builder that
turns a ``HelpRequestFilter`` into one combined specification.
"""

from typing import Iterable, List

from constants import HelpRequestStatus
from dtos.internal.help_request_filter import HelpRequestFilter
from models import HelpRequest
from .specifications import Specification, all_of


class RequestedBySpec(Specification[HelpRequest]):
    """Help requests posted by a specific user."""

    def __init__(self, user_id: int):
        self.user_id = user_id

    def is_satisfied_by(self, help_request: HelpRequest) -> bool:
        return help_request.requester_user_id == self.user_id

    def to_sql_filter(self):
        return HelpRequest.requester_user_id == self.user_id


class ZipCodeInSpec(Specification[HelpRequest]):
    """Help requests located in any of the given zip codes."""

    def __init__(self, zip_codes: Iterable[str]):
        self.zip_codes = tuple(zip_codes)

    def is_satisfied_by(self, help_request: HelpRequest) -> bool:
        return help_request.zip_code in self.zip_codes

    def to_sql_filter(self):
        return HelpRequest.zip_code.in_(self.zip_codes)


class StatusInSpec(Specification[HelpRequest]):
    """Help requests in any of the given statuses."""

    def __init__(self, statuses: Iterable[HelpRequestStatus]):
        self.statuses = tuple(HelpRequestStatus(status) for status in statuses)

    def is_satisfied_by(self, help_request: HelpRequest) -> bool:
        if help_request.status is None:
            return False
        return HelpRequestStatus(help_request.status) in self.statuses

    def to_sql_filter(self):
        return HelpRequest.status.in_(self.statuses)


def build_help_request_spec(help_request_filter: HelpRequestFilter) -> Specification[HelpRequest]:
    """
    Translate a filter into a single specification.

    Present criteria are AND-combined; ``exclude_user_id`` wins over
    ``user_id`` when both name the same user.

    Example:
        spec = build_help_request_spec(HelpRequestFilter(zip_codes="10115"))
        requests = help_request_repo.find_matching(spec)
    """
    specs: List[Specification[HelpRequest]] = []

    if help_request_filter.user_id is not None:
        specs.append(RequestedBySpec(help_request_filter.user_id))

    if help_request_filter.exclude_user_id is not None:
        specs.append(~RequestedBySpec(help_request_filter.exclude_user_id))

    if help_request_filter.zip_codes:
        specs.append(ZipCodeInSpec(help_request_filter.zip_codes))

    if help_request_filter.statuses:
        specs.append(StatusInSpec(help_request_filter.statuses))

    return all_of(specs)
