"""
Flow Efficiency report

Share of elapsed time spent actively working versus waiting to start.
"""

from collections.abc import Sequence

from kanban_metrics.core import get_logger
from kanban_metrics.domain import FlowEfficiency, WorkItem
from kanban_metrics.reports import render_report
from kanban_metrics.utils.datetime_utils import days_between

logger = get_logger(__name__)


def calculate_flow_efficiency(items: Sequence[WorkItem]) -> FlowEfficiency:
    """
    Aggregate waiting and active time over completed items.

    Waiting time runs from creation to start and active time from start to
    completion. An item without a start time counts its whole lead time as
    active. Items lacking a creation or completion time do not qualify.

    Args:
        items: Filtered work items

    Returns:
        FlowEfficiency totals (efficiency_percent is None when nothing qualifies)
    """
    item_count = 0
    total_waiting = 0.0
    total_active = 0.0

    for item in items:
        completed = item.completion_time
        if completed is None or item.created_at is None:
            continue

        if item.started_at is not None:
            total_waiting += days_between(item.created_at, item.started_at)
            total_active += days_between(item.started_at, completed)
        else:
            total_active += days_between(item.created_at, completed)
        item_count += 1

    return FlowEfficiency(
        item_count=item_count,
        total_waiting_days=total_waiting,
        total_active_days=total_active,
    )


def generate_flow_report(items: Sequence[WorkItem]) -> str:
    """Render the flow efficiency report for the given items."""
    metrics = calculate_flow_efficiency(items)
    logger.debug(
        "Flow efficiency calculated",
        extra={"item_count": metrics.item_count, "efficiency_percent": metrics.efficiency_percent},
    )
    return render_report("metrics/flow.md.j2", metrics=metrics)
