"""
Domain Models - Type-safe data structures for board metrics

This package contains dataclasses and vocabularies representing the domain:
    - work_item: WorkItem
    - types: MetricsType, PeriodGranularity, DateField, AdHocPolicy, ReportType
    - reports: structured results of the report generators

Usage:
    from kanban_metrics.domain import WorkItem, MetricsType

    item = WorkItem(id="1", name="Login page", estimate=3, is_completed=True)
    if item.is_ad_hoc:
        print(f"Item {item.id} is an ad-hoc request")
"""

from .reports import (
    AgedItem,
    CategoryBreakdown,
    CategoryRow,
    Delta,
    EstimationAccuracy,
    FlowEfficiency,
    LeadTimeMetrics,
    MonthlyMetrics,
    SizeStats,
    StateAge,
    SummaryStats,
    TeamImprovement,
    ThroughputBucket,
    ThroughputMetrics,
    WorkItemAge,
)
from .types import AdHocPolicy, DateField, MetricsType, MetricsValidationError, PeriodGranularity, ReportType
from .work_item import WorkItem

__all__ = [
    # Work items
    "WorkItem",
    # Vocabularies
    "AdHocPolicy",
    "DateField",
    "MetricsType",
    "MetricsValidationError",
    "PeriodGranularity",
    "ReportType",
    # Report results
    "AgedItem",
    "CategoryBreakdown",
    "CategoryRow",
    "Delta",
    "EstimationAccuracy",
    "FlowEfficiency",
    "LeadTimeMetrics",
    "MonthlyMetrics",
    "SizeStats",
    "StateAge",
    "SummaryStats",
    "TeamImprovement",
    "ThroughputBucket",
    "ThroughputMetrics",
    "WorkItemAge",
]
