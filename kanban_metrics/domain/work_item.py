"""
Work item domain model

A WorkItem is one card of a board snapshot. It is produced by ingestion and
treated as read-only by the metrics engine.

Optional timestamps are real optionals: a missing creation, start or
completion time is None, never a placeholder date.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import assert_never

from .constants import metrics_config
from .types import DateField


@dataclass(frozen=True)
class WorkItem:
    """
    Single work item from a board snapshot.

    Attributes:
        id: Board identifier
        name: Item title
        type: Item type label (feature, bug, chore, ...), may be empty
        owners: Owner identifiers
        estimate: Story points (>= 0, 0 means unestimated)
        is_completed: Completion flag
        labels: Free-text labels
        state: Workflow state label, may be empty
        created_at: Creation time, if known
        started_at: Time active work started, if known
        completed_at: Completion time, if known
        team: Owning team (category reports only)
        epic: Parent epic (category reports only)
        product_area: Product area (category reports only)

    Example:
        item = WorkItem(
            id="42",
            name="Checkout button",
            estimate=3,
            is_completed=True,
            created_at=datetime(2024, 4, 1, tzinfo=UTC),
            completed_at=datetime(2024, 4, 10, tzinfo=UTC),
        )
        print(item.lead_time_days)  # 9.0
    """

    id: str
    name: str
    type: str = ""
    owners: tuple[str, ...] = ()
    estimate: float = 0.0
    is_completed: bool = False
    labels: tuple[str, ...] = ()
    state: str = ""
    created_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    team: str = ""
    epic: str = ""
    product_area: str = ""

    def __post_init__(self) -> None:
        """
        Validate estimate and timestamps, normalizing naive timestamps to UTC.

        Raises:
            ValueError: If estimate is negative
            TypeError: If a timestamp is neither a datetime nor None
        """
        if self.estimate < 0:
            raise ValueError(f"estimate must be >= 0, got {self.estimate}")

        for name in ("created_at", "started_at", "completed_at"):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, datetime):
                raise TypeError(f"{name} must be datetime or None, got {type(value)}")
            if value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=UTC))

        object.__setattr__(self, "owners", tuple(self.owners))
        object.__setattr__(self, "labels", tuple(self.labels))

    @property
    def is_ad_hoc(self) -> bool:
        """True if any label equals the ad-hoc label, ignoring case."""
        target = metrics_config.AD_HOC_LABEL
        return any(label.lower() == target for label in self.labels)

    @property
    def completion_time(self) -> datetime | None:
        """Completion timestamp, or None when the item is not flagged completed."""
        if not self.is_completed:
            return None
        return self.completed_at

    def timestamp_for(self, date_field: DateField) -> datetime | None:
        """
        Resolve the timestamp selected by a DateField.

        An incomplete item has no completion timestamp regardless of any
        stored value.

        Args:
            date_field: Which timestamp to resolve

        Returns:
            The timestamp, or None if the item cannot be dated by that field
        """
        match date_field:
            case DateField.CREATION:
                return self.created_at
            case DateField.START:
                return self.started_at
            case DateField.COMPLETION:
                return self.completion_time
            case _:
                assert_never(date_field)

    @property
    def lead_time_days(self) -> float | None:
        """Days from creation to completion, None without both timestamps."""
        completed = self.completion_time
        if completed is None or self.created_at is None:
            return None
        return (completed - self.created_at).total_seconds() / metrics_config.SECONDS_PER_DAY

    @property
    def cycle_time_days(self) -> float | None:
        """Days from start to completion, None without both timestamps."""
        completed = self.completion_time
        if completed is None or self.started_at is None:
            return None
        return (completed - self.started_at).total_seconds() / metrics_config.SECONDS_PER_DAY

    def __str__(self) -> str:
        return f"WorkItem(id={self.id}, name={self.name}, estimate={self.estimate}, completed={self.is_completed})"
