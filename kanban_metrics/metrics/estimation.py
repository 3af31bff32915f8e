"""
Estimation Accuracy report

Compares canonical story-point sizes with the cycle time items actually took:
days per point for each size, raw cycle time for each size, and the Pearson
correlation between size and cycle time.
"""

from collections import defaultdict
from collections.abc import Sequence

from kanban_metrics.core import get_logger
from kanban_metrics.domain import EstimationAccuracy, WorkItem
from kanban_metrics.reports import render_report
from kanban_metrics.utils.statistics import calculate_correlation, interpret_correlation, nearest_canonical_size

from .lead_time import size_rows

logger = get_logger(__name__)


def calculate_estimation_accuracy(items: Sequence[WorkItem]) -> EstimationAccuracy:
    """
    Relate canonical size to cycle time.

    Only completed items with both a start and a completion time qualify.
    Unestimated items (size 0) never appear in the tables and are left out
    of the correlation.

    Args:
        items: Filtered work items

    Returns:
        EstimationAccuracy; correlation and band are None when no sized item qualifies

    Example:
        accuracy = calculate_estimation_accuracy(items)
        if accuracy.correlation is not None:
            print(f"{accuracy.correlation:.2f} ({accuracy.correlation_band})")
    """
    cycle_times: dict[float, list[float]] = defaultdict(list)
    sizes: list[float] = []
    times: list[float] = []

    for item in items:
        cycle_time = item.cycle_time_days
        if cycle_time is None:
            continue

        size = nearest_canonical_size(item.estimate)
        cycle_times[size].append(cycle_time)
        if size != 0:
            sizes.append(size)
            times.append(cycle_time)

    days_per_point = {
        size: [cycle_time / size for cycle_time in values] for size, values in cycle_times.items() if size != 0
    }

    correlation: float | None = None
    band: str | None = None
    if sizes:
        correlation = calculate_correlation(sizes, times)
        band = interpret_correlation(correlation)

    return EstimationAccuracy(
        days_per_point=size_rows(days_per_point),
        cycle_time=size_rows(cycle_times),
        correlation=correlation,
        correlation_band=band,
        sample_size=len(sizes),
    )


def generate_estimation_report(items: Sequence[WorkItem]) -> str:
    """Render the estimation accuracy report for the given items."""
    metrics = calculate_estimation_accuracy(items)
    logger.debug(
        "Estimation accuracy calculated",
        extra={"sample_size": metrics.sample_size, "correlation": metrics.correlation},
    )
    return render_report("metrics/estimation.md.j2", metrics=metrics)
