"""
Report result models

Structured results produced by the report generators. Generators compute
these from a filtered item set; the rendering layer turns them into text.
Keeping the numbers separate from their presentation lets tests assert on
values rather than on formatted strings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple

from .types import PeriodGranularity


class SummaryStats(NamedTuple):
    """Minimum, maximum, mean and median of a series (all 0.0 for no data)."""

    minimum: float
    maximum: float
    mean: float
    median: float


@dataclass(frozen=True)
class SizeStats:
    """
    Statistics for one canonical story-point size.

    Attributes:
        size: Canonical point size
        count: Number of items in this size bucket
        stats: Summary statistics over the bucket's values
    """

    size: float
    count: int
    stats: SummaryStats


@dataclass(frozen=True)
class LeadTimeMetrics:
    """
    Lead and cycle time by canonical story-point size (days).

    Attributes:
        lead_time: Rows for sizes with lead time data, ascending size
        cycle_time: Rows for sizes with cycle time data, ascending size
        lead_sample_size: Items contributing a lead time
        cycle_sample_size: Items contributing a cycle time
    """

    lead_time: list[SizeStats]
    cycle_time: list[SizeStats]
    lead_sample_size: int = 0
    cycle_sample_size: int = 0


@dataclass(frozen=True)
class ThroughputBucket:
    """
    Completed work in one period bucket.

    Attributes:
        key: Period key (YYYY-MM or YYYY-Wnn)
        period_start: Start instant of the period
        count: Items completed
        points: Story points completed
        types: Completed item count per item type
    """

    key: str
    period_start: datetime
    count: int
    points: float
    types: dict[str, int] = field(default_factory=dict)

    @property
    def avg_points(self) -> float:
        """Average story points per completed item."""
        if self.count == 0:
            return 0.0
        return self.points / self.count


@dataclass(frozen=True)
class ThroughputMetrics:
    """
    Throughput per period.

    Attributes:
        granularity: Bucketing used
        buckets: Buckets in ascending chronological order
        item_types: All item types seen, sorted alphabetically
    """

    granularity: PeriodGranularity
    buckets: list[ThroughputBucket]
    item_types: list[str]

    @property
    def period_name(self) -> str:
        """Column label for the period ("Week" or "Month")."""
        return "Week" if self.granularity == PeriodGranularity.WEEK else "Month"

    @property
    def total_items(self) -> int:
        return sum(bucket.count for bucket in self.buckets)


@dataclass(frozen=True)
class FlowEfficiency:
    """
    Aggregate waiting vs active time across qualifying items (days).

    Items without a start time count their whole lead time as active.

    Attributes:
        item_count: Items contributing to the aggregate
        total_waiting_days: Sum of waiting time
        total_active_days: Sum of active time
    """

    item_count: int
    total_waiting_days: float
    total_active_days: float

    @property
    def total_days(self) -> float:
        return self.total_waiting_days + self.total_active_days

    @property
    def has_data(self) -> bool:
        """False when no item qualified or no time elapsed at all."""
        return self.item_count > 0 and self.total_days > 0

    @property
    def avg_waiting_days(self) -> float:
        return self.total_waiting_days / self.item_count if self.item_count else 0.0

    @property
    def avg_active_days(self) -> float:
        return self.total_active_days / self.item_count if self.item_count else 0.0

    @property
    def waiting_percent(self) -> float | None:
        if not self.has_data:
            return None
        return self.total_waiting_days / self.total_days * 100

    @property
    def efficiency_percent(self) -> float | None:
        """
        Active share of total time as a percentage.

        Returns:
            Percentage (0-100), or None when there is no data
        """
        if not self.has_data:
            return None
        return self.total_active_days / self.total_days * 100


@dataclass(frozen=True)
class EstimationAccuracy:
    """
    Relationship between canonical size and cycle time.

    Attributes:
        days_per_point: Cycle time divided by size, per size
        cycle_time: Raw cycle time, per size
        correlation: Pearson correlation of size vs cycle time, None without sized items
        correlation_band: Interpretation of the correlation, None without sized items
        sample_size: Sized items used for the correlation
    """

    days_per_point: list[SizeStats]
    cycle_time: list[SizeStats]
    correlation: float | None
    correlation_band: str | None
    sample_size: int = 0


@dataclass(frozen=True)
class AgedItem:
    """An incomplete item and its age in days."""

    id: str
    name: str
    age_days: float


@dataclass(frozen=True)
class StateAge:
    """
    Age statistics for incomplete items in one workflow state.

    Attributes:
        state: Workflow state ("Unknown" when blank)
        count: Items in this state
        stats: Summary statistics over ages
        oldest: Oldest items, descending age
    """

    state: str
    count: int
    stats: SummaryStats
    oldest: list[AgedItem]


@dataclass(frozen=True)
class WorkItemAge:
    """Age of in-flight work by state, measured at as_of."""

    as_of: datetime
    states: list[StateAge]

    @property
    def total_items(self) -> int:
        return sum(state.count for state in self.states)


@dataclass(frozen=True)
class Delta:
    """
    Change versus the previous period.

    Attributes:
        absolute: Current minus previous
        percent: Relative change in percent, None when the previous value is 0
    """

    absolute: float
    percent: float | None


@dataclass(frozen=True)
class MonthlyMetrics:
    """
    Delivery metrics for one calendar month of completions.

    Attributes:
        month: Month key (YYYY-MM)
        item_count: Items completed
        story_points: Story points completed
        avg_lead_time: Mean lead time (days), 0 without data
        median_lead_time: Median lead time (days), 0 without data
        avg_cycle_time: Mean cycle time (days), 0 without data
        median_cycle_time: Median cycle time (days), 0 without data
        lead_time_delta: Change in mean lead time vs previous month, None for the first month
        cycle_time_delta: Change in mean cycle time vs previous month, None for the first month
    """

    month: str
    item_count: int
    story_points: float
    avg_lead_time: float
    median_lead_time: float
    avg_cycle_time: float
    median_cycle_time: float
    lead_time_delta: Delta | None = None
    cycle_time_delta: Delta | None = None


@dataclass(frozen=True)
class TeamImprovement:
    """Month-over-month delivery metrics in ascending month order."""

    months: list[MonthlyMetrics]

    def month(self, key: str) -> MonthlyMetrics | None:
        """
        Look up a month row by its YYYY-MM key.

        Lookup helper for library callers and tests; the report template
        iterates months directly.
        """
        for row in self.months:
            if row.month == key:
                return row
        return None


@dataclass(frozen=True)
class CategoryRow:
    """
    Story points credited to one category value (a contributor, epic, team
    or product area).

    Attributes:
        name: Category value, or the bucket name for cards without one
        points: Story points credited
        item_count: Cards credited
    """

    name: str
    points: float
    item_count: int


@dataclass(frozen=True)
class CategoryBreakdown:
    """
    Story points grouped by one card attribute, largest first.

    Attributes:
        title: Category name used in the report title ("Contributor", "Epic", ...)
        rows: One row per category value, sorted by points descending
        total_items: Distinct cards counted (a card with several owners counts once)
        name_width: Column width for category names in rendered output
    """

    title: str
    rows: list[CategoryRow]
    total_items: int
    name_width: int = 30

    @property
    def total_points(self) -> float:
        """Sum of points over all rows."""
        return sum(row.points for row in self.rows)
