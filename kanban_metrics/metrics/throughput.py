"""
Throughput report

Completed items and story points per period (ISO week or calendar month),
with a per-period breakdown by item type.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from kanban_metrics.core import get_logger
from kanban_metrics.domain import PeriodGranularity, ThroughputBucket, ThroughputMetrics, WorkItem
from kanban_metrics.reports import render_report
from kanban_metrics.utils.datetime_utils import bucket_key, period_start

logger = get_logger(__name__)

UNSPECIFIED_TYPE = "Unspecified"


@dataclass
class _BucketAccumulator:
    period_start: datetime
    count: int = 0
    points: float = 0.0
    types: dict[str, int] = field(default_factory=dict)

    def add(self, item: WorkItem) -> None:
        item_type = item.type or UNSPECIFIED_TYPE
        self.count += 1
        self.points += item.estimate
        self.types[item_type] = self.types.get(item_type, 0) + 1


def calculate_throughput_metrics(
    items: Sequence[WorkItem], granularity: PeriodGranularity | str = PeriodGranularity.MONTH
) -> ThroughputMetrics:
    """
    Count completed items and points per period bucket.

    Args:
        items: Filtered work items; only completed items with a completion time count
        granularity: Week or month bucketing

    Returns:
        ThroughputMetrics with buckets in ascending chronological order

    Raises:
        MetricsValidationError: If granularity is not a valid period type

    Example:
        metrics = calculate_throughput_metrics(items, PeriodGranularity.MONTH)
        for bucket in metrics.buckets:
            print(bucket.key, bucket.count, bucket.points)
    """
    granularity = PeriodGranularity.parse(granularity)
    accumulators: dict[str, _BucketAccumulator] = {}

    for item in items:
        completed = item.completion_time
        if completed is None:
            continue

        key = bucket_key(completed, granularity)
        if key not in accumulators:
            accumulators[key] = _BucketAccumulator(period_start=period_start(completed, granularity))
        accumulators[key].add(item)

    buckets = [
        ThroughputBucket(key=key, period_start=acc.period_start, count=acc.count, points=acc.points, types=acc.types)
        for key, acc in sorted(accumulators.items())
    ]
    item_types = sorted({item_type for bucket in buckets for item_type in bucket.types})

    return ThroughputMetrics(granularity=granularity, buckets=buckets, item_types=item_types)


def generate_throughput_report(
    items: Sequence[WorkItem], granularity: PeriodGranularity | str = PeriodGranularity.MONTH
) -> str:
    """Render the throughput report for the given items."""
    metrics = calculate_throughput_metrics(items, granularity)
    logger.debug(
        "Throughput metrics calculated",
        extra={"buckets": len(metrics.buckets), "total_items": metrics.total_items},
    )
    return render_report("metrics/throughput.md.j2", metrics=metrics)
