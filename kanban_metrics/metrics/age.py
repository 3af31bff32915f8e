"""
Work-Item Age report

How long in-flight (incomplete) work has been open, grouped by workflow state.
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import UTC, datetime

from kanban_metrics.core import get_logger
from kanban_metrics.domain import AgedItem, StateAge, WorkItem, WorkItemAge
from kanban_metrics.domain.constants import metrics_config
from kanban_metrics.reports import render_report
from kanban_metrics.utils.datetime_utils import days_between, ensure_utc
from kanban_metrics.utils.statistics import calculate_summary_stats

logger = get_logger(__name__)

UNKNOWN_STATE = "Unknown"


def calculate_work_item_age(items: Sequence[WorkItem], as_of: datetime | None = None) -> WorkItemAge:
    """
    Measure the age of incomplete items at a reference instant.

    Age runs from the start time, or from the creation time for items that
    never started. Items with neither timestamp cannot be aged and are skipped.

    Args:
        items: Filtered work items; completed items are ignored
        as_of: Reference instant (default: now, UTC)

    Returns:
        WorkItemAge with states sorted alphabetically; each state lists its
        oldest items by descending age, ties kept in input order
    """
    as_of = ensure_utc(as_of) if as_of is not None else datetime.now(UTC)
    by_state: dict[str, list[AgedItem]] = defaultdict(list)
    skipped = 0

    for item in items:
        if item.is_completed:
            continue

        since = item.started_at if item.started_at is not None else item.created_at
        if since is None:
            skipped += 1
            continue

        state = item.state or UNKNOWN_STATE
        by_state[state].append(AgedItem(id=item.id, name=item.name, age_days=days_between(since, as_of)))

    if skipped:
        logger.debug("Skipped incomplete items without start or creation time", extra={"skipped": skipped})

    states = []
    for state in sorted(by_state):
        aged = by_state[state]
        # sorted() is stable, so equal ages keep input order
        oldest = sorted(aged, key=lambda aged_item: aged_item.age_days, reverse=True)
        states.append(
            StateAge(
                state=state,
                count=len(aged),
                stats=calculate_summary_stats([aged_item.age_days for aged_item in aged]),
                oldest=oldest[: metrics_config.OLDEST_ITEMS_LIMIT],
            )
        )

    return WorkItemAge(as_of=as_of, states=states)


def generate_age_report(items: Sequence[WorkItem], as_of: datetime | None = None) -> str:
    """Render the work-item age report for the given items."""
    metrics = calculate_work_item_age(items, as_of)
    logger.debug("Work item age calculated", extra={"total_items": metrics.total_items})
    return render_report("metrics/age.md.j2", metrics=metrics)
