"""
Lead/Cycle Time report

Lead time (creation to completion) and cycle time (start to completion) of
completed items, grouped by canonical story-point size.
"""

from collections import defaultdict
from collections.abc import Sequence

from kanban_metrics.core import get_logger
from kanban_metrics.domain import LeadTimeMetrics, SizeStats, WorkItem
from kanban_metrics.domain.constants import metrics_config
from kanban_metrics.reports import render_report
from kanban_metrics.utils.statistics import calculate_summary_stats, nearest_canonical_size

logger = get_logger(__name__)


def size_rows(values_by_size: dict[float, list[float]]) -> list[SizeStats]:
    """
    Summarize grouped values for each canonical size that has data.

    Sizes are emitted in ascending canonical order; size 0 (unestimated) and
    sizes without values are omitted.
    """
    rows = []
    for size in metrics_config.CANONICAL_POINT_SIZES:
        values = values_by_size.get(size)
        if not values:
            continue
        rows.append(SizeStats(size=size, count=len(values), stats=calculate_summary_stats(values)))
    return rows


def calculate_lead_time_metrics(items: Sequence[WorkItem]) -> LeadTimeMetrics:
    """
    Calculate lead and cycle time statistics by canonical size.

    Items without a creation or completion time are skipped entirely. Items
    without a start time contribute a lead time but no cycle time.

    Args:
        items: Filtered work items

    Returns:
        LeadTimeMetrics with one row per populated canonical size
    """
    lead_times: dict[float, list[float]] = defaultdict(list)
    cycle_times: dict[float, list[float]] = defaultdict(list)
    lead_count = 0
    cycle_count = 0

    for item in items:
        lead_time = item.lead_time_days
        if lead_time is None:
            continue

        size = nearest_canonical_size(item.estimate)
        lead_times[size].append(lead_time)
        lead_count += 1

        cycle_time = item.cycle_time_days
        if cycle_time is not None:
            cycle_times[size].append(cycle_time)
            cycle_count += 1

    return LeadTimeMetrics(
        lead_time=size_rows(lead_times),
        cycle_time=size_rows(cycle_times),
        lead_sample_size=lead_count,
        cycle_sample_size=cycle_count,
    )


def generate_lead_time_report(items: Sequence[WorkItem]) -> str:
    """Render the lead/cycle time report for the given items."""
    metrics = calculate_lead_time_metrics(items)
    logger.debug(
        "Lead time metrics calculated",
        extra={"lead_sample_size": metrics.lead_sample_size, "cycle_sample_size": metrics.cycle_sample_size},
    )
    return render_report("metrics/lead_time.md.j2", metrics=metrics)
