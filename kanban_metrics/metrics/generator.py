"""
Metrics Orchestrator

Validates the report selectors, filters the board snapshot, dispatches to the
requested report generator (or all six) and prepends a descriptive header.
Category breakdowns (story points by contributor, epic, team or product area)
go through the same filtering and header.

Usage:
    from kanban_metrics.metrics import DateRange, MetricsGenerator

    generator = MetricsGenerator(items)
    text = generator.generate("throughput", "week", DateRange(start=start, end=end))
    text = generator.generate_breakdown("contributor", DateRange(start=start, end=end))
"""

from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime
from typing import assert_never

from kanban_metrics.core import get_logger, log_with_context
from kanban_metrics.domain import AdHocPolicy, DateField, MetricsType, PeriodGranularity, ReportType, WorkItem
from kanban_metrics.domain.constants import metrics_config
from kanban_metrics.reports import render_report
from kanban_metrics.utils.datetime_utils import ensure_utc

from .age import generate_age_report
from .breakdown import generate_category_report
from .estimation import generate_estimation_report
from .filtering import ALL_TIME, DateRange, filter_items
from .flow import generate_flow_report
from .improvement import generate_improvement_report
from .lead_time import generate_lead_time_report
from .throughput import generate_throughput_report

logger = get_logger(__name__)

NO_ITEMS_MESSAGE = "No items found in the specified date range."

REPORT_SEPARATOR = "\n\n" + "=" * metrics_config.SEPARATOR_WIDTH + "\n\n"


def combine_reports(reports: Iterable[str]) -> str:
    """Join reports with a full-width '=' separator line."""
    return REPORT_SEPARATOR.join(reports)


def build_header(
    selection: MetricsType | ReportType,
    granularity: PeriodGranularity | None,
    date_range: DateRange,
    ad_hoc_policy: AdHocPolicy,
) -> str:
    """
    Describe the selection a report was computed over.

    Names the metrics type and period (or, for a category breakdown, the
    report type), the effective date range and, unless all items were
    included, the ad-hoc policy applied.
    """
    return render_report(
        "metrics/header.md.j2",
        selection=selection,
        is_breakdown=isinstance(selection, ReportType),
        granularity=granularity,
        date_range=date_range,
        ad_hoc_policy=ad_hoc_policy,
    )


class MetricsGenerator:
    """
    Generates metrics reports over one board snapshot.

    The reference instant for work-item age is fixed when the generator is
    created, so repeated calls with the same arguments return identical text.

    Attributes:
        items: The board snapshot (never modified)
        as_of: Reference instant for the age report
    """

    def __init__(self, items: Iterable[WorkItem], as_of: datetime | None = None):
        self.items: tuple[WorkItem, ...] = tuple(items)
        self.as_of = ensure_utc(as_of) if as_of is not None else datetime.now(UTC)

    def generate(
        self,
        metrics_type: MetricsType | str,
        granularity: PeriodGranularity | str,
        date_range: DateRange | None = None,
        date_field: DateField | str = DateField.COMPLETION,
        ad_hoc_policy: AdHocPolicy | str = AdHocPolicy.INCLUDE,
    ) -> str:
        """
        Generate a metrics report.

        Args:
            metrics_type: Report to generate, or "all" for every report
            granularity: Week or month bucketing for period-based reports
            date_range: Inclusive bounds on date_field (default: all time)
            date_field: Timestamp used for range filtering
            ad_hoc_policy: include, exclude or only ad-hoc requests

        Returns:
            Header plus report text, or NO_ITEMS_MESSAGE when nothing matches

        Raises:
            MetricsValidationError: If any selector is not a valid value
        """
        # Validate every selector before touching the items
        metrics_type = MetricsType.parse(metrics_type)
        granularity = PeriodGranularity.parse(granularity)
        date_field = DateField.parse(date_field)
        ad_hoc_policy = AdHocPolicy.parse(ad_hoc_policy)
        date_range = date_range if date_range is not None else ALL_TIME

        filtered = filter_items(self.items, date_range, date_field, ad_hoc_policy)
        if not filtered:
            logger.info(
                "No items matched the selection",
                extra={"total_items": len(self.items), "range": date_range.describe()},
            )
            return NO_ITEMS_MESSAGE

        log_with_context(
            logger,
            "info",
            "Generating metrics report",
            metrics_type=str(metrics_type),
            granularity=str(granularity),
            item_count=len(filtered),
        )

        body = self._dispatch(metrics_type, granularity, filtered)
        return build_header(metrics_type, granularity, date_range, ad_hoc_policy) + body

    def generate_breakdown(
        self,
        report_type: ReportType | str,
        date_range: DateRange | None = None,
        date_field: DateField | str = DateField.COMPLETION,
        ad_hoc_policy: AdHocPolicy | str = AdHocPolicy.INCLUDE,
    ) -> str:
        """
        Generate a story-points-by-category report.

        Args:
            report_type: contributor, epic, team or product-area
            date_range: Inclusive bounds on date_field (default: all time)
            date_field: Timestamp used for range filtering
            ad_hoc_policy: include, exclude or only ad-hoc requests

        Returns:
            Header plus report text, or NO_ITEMS_MESSAGE when nothing matches

        Raises:
            MetricsValidationError: If any selector is not a valid value
        """
        report_type = ReportType.parse(report_type)
        date_field = DateField.parse(date_field)
        ad_hoc_policy = AdHocPolicy.parse(ad_hoc_policy)
        date_range = date_range if date_range is not None else ALL_TIME

        filtered = filter_items(self.items, date_range, date_field, ad_hoc_policy)
        if not filtered:
            logger.info(
                "No items matched the selection",
                extra={"total_items": len(self.items), "range": date_range.describe()},
            )
            return NO_ITEMS_MESSAGE

        log_with_context(
            logger,
            "info",
            "Generating category breakdown",
            report_type=str(report_type),
            item_count=len(filtered),
        )
        body = generate_category_report(filtered, report_type)
        return build_header(report_type, None, date_range, ad_hoc_policy) + body

    def _dispatch(self, metrics_type: MetricsType, granularity: PeriodGranularity, items: Sequence[WorkItem]) -> str:
        match metrics_type:
            case MetricsType.LEAD_TIME:
                return generate_lead_time_report(items)
            case MetricsType.THROUGHPUT:
                return generate_throughput_report(items, granularity)
            case MetricsType.FLOW:
                return generate_flow_report(items)
            case MetricsType.ESTIMATION:
                return generate_estimation_report(items)
            case MetricsType.AGE:
                return generate_age_report(items, self.as_of)
            case MetricsType.IMPROVEMENT:
                return generate_improvement_report(items)
            case MetricsType.ALL:
                return combine_reports(generator(items) for generator in self._all_generators(granularity))
            case _:
                assert_never(metrics_type)

    def _all_generators(self, granularity: PeriodGranularity) -> list[Callable[[Sequence[WorkItem]], str]]:
        return [
            generate_lead_time_report,
            lambda items: generate_throughput_report(items, granularity),
            generate_flow_report,
            generate_estimation_report,
            lambda items: generate_age_report(items, self.as_of),
            generate_improvement_report,
        ]


def generate_metrics(
    items: Iterable[WorkItem],
    metrics_type: MetricsType | str,
    granularity: PeriodGranularity | str = PeriodGranularity.MONTH,
    date_range: DateRange | None = None,
    date_field: DateField | str = DateField.COMPLETION,
    ad_hoc_policy: AdHocPolicy | str = AdHocPolicy.INCLUDE,
    as_of: datetime | None = None,
) -> str:
    """
    Convenience wrapper: build a MetricsGenerator and generate one report.

    Example:
        text = generate_metrics(items, "lead-time", "month")
    """
    return MetricsGenerator(items, as_of=as_of).generate(
        metrics_type, granularity, date_range, date_field, ad_hoc_policy
    )
