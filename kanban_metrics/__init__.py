"""
kanban-metrics - delivery metrics for kanban board exports

Computes lead/cycle time, throughput, flow efficiency, estimation accuracy,
work-item age and month-over-month improvement reports from a board snapshot.

Usage:
    from kanban_metrics import MetricsGenerator, load_work_items

    items = load_work_items("board.csv")
    print(MetricsGenerator(items).generate("all", "month"))
"""

from .collectors import load_work_items
from .domain import AdHocPolicy, DateField, MetricsType, MetricsValidationError, PeriodGranularity, WorkItem
from .metrics import DateRange, MetricsGenerator, filter_items, generate_metrics

__version__ = "1.0.0"

__all__ = [
    "AdHocPolicy",
    "DateField",
    "DateRange",
    "MetricsGenerator",
    "MetricsType",
    "MetricsValidationError",
    "PeriodGranularity",
    "WorkItem",
    "filter_items",
    "generate_metrics",
    "load_work_items",
]
