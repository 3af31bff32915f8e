"""
Team Improvement report

Month-over-month delivery metrics for completed work, with the change in
average lead and cycle time versus the previous month.
"""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import replace

from kanban_metrics.core import get_logger
from kanban_metrics.domain import Delta, MonthlyMetrics, PeriodGranularity, TeamImprovement, WorkItem
from kanban_metrics.reports import render_report
from kanban_metrics.utils.datetime_utils import bucket_key
from kanban_metrics.utils.statistics import calculate_summary_stats

logger = get_logger(__name__)


def calculate_delta(current: float, previous: float) -> Delta:
    """
    Change from previous to current.

    The percentage is None when previous is 0, since no relative change
    can be expressed.

    Example:
        >>> calculate_delta(8.0, 10.0)
        Delta(absolute=-2.0, percent=-20.0)
    """
    absolute = current - previous
    percent = absolute / previous * 100 if previous != 0 else None
    return Delta(absolute=absolute, percent=percent)


def _month_row(month: str, items: list[WorkItem]) -> MonthlyMetrics:
    lead_times = [t for t in (item.lead_time_days for item in items) if t is not None]
    cycle_times = [t for t in (item.cycle_time_days for item in items) if t is not None]
    lead_stats = calculate_summary_stats(lead_times)
    cycle_stats = calculate_summary_stats(cycle_times)

    return MonthlyMetrics(
        month=month,
        item_count=len(items),
        story_points=sum(item.estimate for item in items),
        avg_lead_time=lead_stats.mean,
        median_lead_time=lead_stats.median,
        avg_cycle_time=cycle_stats.mean,
        median_cycle_time=cycle_stats.median,
    )


def calculate_team_improvement(items: Sequence[WorkItem]) -> TeamImprovement:
    """
    Calculate per-month delivery metrics and month-over-month deltas.

    Completed items are grouped by calendar month of completion. Lead and
    cycle time averages only use items that have the needed timestamps, and
    are 0 for a month with no such item. Deltas compare each month with the
    preceding month present in the data (not necessarily the calendar month
    before); the first month has none.

    Args:
        items: Filtered work items

    Returns:
        TeamImprovement with months in ascending order
    """
    by_month: dict[str, list[WorkItem]] = defaultdict(list)
    for item in items:
        completed = item.completion_time
        if completed is None:
            continue
        by_month[bucket_key(completed, PeriodGranularity.MONTH)].append(item)

    months: list[MonthlyMetrics] = []
    previous: MonthlyMetrics | None = None
    for month in sorted(by_month):
        row = _month_row(month, by_month[month])
        if previous is not None:
            row = replace(
                row,
                lead_time_delta=calculate_delta(row.avg_lead_time, previous.avg_lead_time),
                cycle_time_delta=calculate_delta(row.avg_cycle_time, previous.avg_cycle_time),
            )
        months.append(row)
        previous = row

    return TeamImprovement(months=months)


def generate_improvement_report(items: Sequence[WorkItem]) -> str:
    """Render the team improvement report for the given items."""
    metrics = calculate_team_improvement(items)
    logger.debug("Team improvement calculated", extra={"months": len(metrics.months)})
    return render_report("metrics/improvement.md.j2", metrics=metrics)
