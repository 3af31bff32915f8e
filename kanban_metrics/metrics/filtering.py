"""
Item Filter

Selects the work items a report is computed over: items whose chosen
timestamp falls inside an inclusive date range and whose ad-hoc
classification matches the requested policy.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import assert_never

from kanban_metrics.core import get_logger
from kanban_metrics.domain import AdHocPolicy, DateField, MetricsValidationError, WorkItem
from kanban_metrics.utils.datetime_utils import ensure_utc

logger = get_logger(__name__)

_HEADER_DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class DateRange:
    """
    Optional inclusive bounds on an item timestamp.

    Attributes:
        start: Earliest accepted instant, None for an open start
        end: Latest accepted instant, None for an open end

    Raises:
        MetricsValidationError: If end is earlier than start
    """

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start is not None:
            object.__setattr__(self, "start", ensure_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", ensure_utc(self.end))
        if self.start is not None and self.end is not None and self.end < self.start:
            raise MetricsValidationError(
                f"end date {self.end:%Y-%m-%d} is before start date {self.start:%Y-%m-%d}"
            )

    def contains(self, timestamp: datetime) -> bool:
        """True if timestamp is within the range; both bounds are inclusive."""
        if self.start is not None and timestamp < self.start:
            return False
        if self.end is not None and timestamp > self.end:
            return False
        return True

    def describe(self) -> str:
        """Header line naming the effective range."""
        if self.start is not None and self.end is not None:
            return f"Date Range: {self.start:{_HEADER_DATE_FORMAT}} to {self.end:{_HEADER_DATE_FORMAT}}"
        if self.start is not None:
            return f"From: {self.start:{_HEADER_DATE_FORMAT}}"
        if self.end is not None:
            return f"To: {self.end:{_HEADER_DATE_FORMAT}}"
        return "Date Range: All Time"


ALL_TIME = DateRange()


def is_ad_hoc_request(item: WorkItem) -> bool:
    """True if the item carries the ad-hoc label (case-insensitive)."""
    return item.is_ad_hoc


def _matches_policy(item: WorkItem, policy: AdHocPolicy) -> bool:
    match policy:
        case AdHocPolicy.INCLUDE:
            return True
        case AdHocPolicy.EXCLUDE:
            return not is_ad_hoc_request(item)
        case AdHocPolicy.ONLY:
            return is_ad_hoc_request(item)
        case _:
            assert_never(policy)


def filter_items(
    items: Iterable[WorkItem],
    date_range: DateRange = ALL_TIME,
    date_field: DateField | str = DateField.COMPLETION,
    ad_hoc_policy: AdHocPolicy | str = AdHocPolicy.INCLUDE,
) -> list[WorkItem]:
    """
    Select items by date range and ad-hoc policy.

    An item is dropped when the timestamp named by date_field is absent (an
    incomplete item has no completion timestamp, whatever is stored). Otherwise
    it is kept when the timestamp lies within date_range, inclusive at both
    ends, and its ad-hoc classification matches ad_hoc_policy.

    Args:
        items: Work items to filter (not modified)
        date_range: Inclusive bounds
        date_field: Timestamp that governs the range check
        ad_hoc_policy: include, exclude or only ad-hoc requests

    Returns:
        Kept items in input order

    Raises:
        MetricsValidationError: If date_field or ad_hoc_policy is not a valid value
    """
    date_field = DateField.parse(date_field)
    ad_hoc_policy = AdHocPolicy.parse(ad_hoc_policy)

    kept: list[WorkItem] = []
    undated = 0
    out_of_range = 0

    for item in items:
        timestamp = item.timestamp_for(date_field)
        if timestamp is None:
            undated += 1
            continue
        if not date_range.contains(timestamp):
            out_of_range += 1
            continue
        if _matches_policy(item, ad_hoc_policy):
            kept.append(item)

    logger.debug(
        "Filtered work items",
        extra={
            "kept": len(kept),
            "undated": undated,
            "out_of_range": out_of_range,
            "date_field": str(date_field),
            "ad_hoc_policy": str(ad_hoc_policy),
        },
    )
    return kept
