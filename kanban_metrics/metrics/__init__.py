"""
Metrics engine

Report generators (six metrics reports plus category breakdowns) and the
orchestrator that filters items and dispatches to them.
"""

from .age import calculate_work_item_age, generate_age_report
from .breakdown import calculate_category_breakdown, generate_category_report
from .estimation import calculate_estimation_accuracy, generate_estimation_report
from .filtering import ALL_TIME, DateRange, filter_items, is_ad_hoc_request
from .flow import calculate_flow_efficiency, generate_flow_report
from .generator import NO_ITEMS_MESSAGE, MetricsGenerator, build_header, combine_reports, generate_metrics
from .improvement import calculate_delta, calculate_team_improvement, generate_improvement_report
from .lead_time import calculate_lead_time_metrics, generate_lead_time_report
from .throughput import calculate_throughput_metrics, generate_throughput_report

__all__ = [
    # Filtering
    "ALL_TIME",
    "DateRange",
    "filter_items",
    "is_ad_hoc_request",
    # Orchestration
    "NO_ITEMS_MESSAGE",
    "MetricsGenerator",
    "build_header",
    "combine_reports",
    "generate_metrics",
    # Generators
    "calculate_lead_time_metrics",
    "generate_lead_time_report",
    "calculate_throughput_metrics",
    "generate_throughput_report",
    "calculate_flow_efficiency",
    "generate_flow_report",
    "calculate_estimation_accuracy",
    "generate_estimation_report",
    "calculate_work_item_age",
    "generate_age_report",
    "calculate_delta",
    "calculate_team_improvement",
    "generate_improvement_report",
    "calculate_category_breakdown",
    "generate_category_report",
]
