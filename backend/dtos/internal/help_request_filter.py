"""
Internal Help Request Filter DTO

Normalized filter command passed from the API boundary to the service and
repository layers.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from constants import HelpRequestStatus


MultiValue = Union[str, Iterable[str], None]


def as_value_set(value: MultiValue) -> Optional[Tuple[str, ...]]:
    """
    Normalize a single value or a collection of values into a tuple.

    Generated API clients send a bare string when only one value is
    selected, so ``"12345"`` and ``["12345"]`` must mean the same thing.
    Duplicates are dropped, first occurrence wins. ``None`` and empty
    collections mean "no constraint" and return ``None``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        values = [value]
    else:
        values = list(value)

    seen = []
    for item in values:
        if item not in seen:
            seen.append(item)
    return tuple(seen) or None


@dataclass(frozen=True)
class HelpRequestFilter:
    """
    Fully resolved help request filter.

    ``user_id`` is always a concrete id here; the ``"me"`` placeholder is
    resolved before this object is built. All present criteria are
    AND-combined, multi-valued criteria match any of their values.
    """

    user_id: Optional[int] = None
    exclude_user_id: Optional[int] = None
    zip_codes: Optional[Tuple[str, ...]] = None
    statuses: Optional[Tuple[HelpRequestStatus, ...]] = None
    include_requester: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'zip_codes', as_value_set(self.zip_codes))
        statuses = as_value_set(self.statuses)
        if statuses is not None:
            statuses = tuple(HelpRequestStatus(status) for status in statuses)
        object.__setattr__(self, 'statuses', statuses)
