"""
Category breakdown reports

Story points grouped by contributor, epic, team or product area. Cards with
no value for the attribute are collected under a fallback bucket ("Unassigned",
"No Epic", "No Team", "Uncategorized").

Usage:
    from kanban_metrics.metrics.breakdown import generate_category_report

    text = generate_category_report(items, "team")
"""

from collections import defaultdict
from collections.abc import Sequence
from typing import assert_never

from kanban_metrics.core import get_logger
from kanban_metrics.domain import CategoryBreakdown, CategoryRow, ReportType, WorkItem
from kanban_metrics.reports import render_report

logger = get_logger(__name__)

# report type -> (title, fallback bucket, name column width)
_CATEGORIES: dict[ReportType, tuple[str, str, int]] = {
    ReportType.CONTRIBUTOR: ("Contributor", "Unassigned", 30),
    ReportType.EPIC: ("Epic", "No Epic", 50),
    ReportType.TEAM: ("Team", "No Team", 30),
    ReportType.PRODUCT_AREA: ("Product Area", "Uncategorized", 30),
}


def _credits(item: WorkItem, report_type: ReportType, fallback: str) -> list[tuple[str, float]]:
    """Category values an item is credited to, with the points each receives."""
    match report_type:
        case ReportType.CONTRIBUTOR:
            owners = [owner.strip() for owner in item.owners if owner.strip()]
            if not owners:
                return [(fallback, item.estimate)]
            share = item.estimate / len(owners)
            return [(owner, share) for owner in owners]
        case ReportType.EPIC:
            value = item.epic
        case ReportType.TEAM:
            value = item.team
        case ReportType.PRODUCT_AREA:
            value = item.product_area
        case _:
            assert_never(report_type)
    return [(value.strip() or fallback, item.estimate)]


def calculate_category_breakdown(items: Sequence[WorkItem], report_type: ReportType | str) -> CategoryBreakdown:
    """
    Group story points by a card attribute.

    Each owner of a multi-owner card receives an equal share of its points
    and counts the card once. Rows are ordered by points descending, then by
    name.

    Args:
        items: Filtered work items
        report_type: Attribute to group by

    Returns:
        CategoryBreakdown with one row per category value

    Raises:
        MetricsValidationError: If report_type is not a valid spelling
    """
    report_type = ReportType.parse(report_type)
    title, fallback, name_width = _CATEGORIES[report_type]

    points: defaultdict[str, float] = defaultdict(float)
    counts: defaultdict[str, int] = defaultdict(int)
    for item in items:
        for name, share in _credits(item, report_type, fallback):
            points[name] += share
            counts[name] += 1

    rows = [CategoryRow(name=name, points=points[name], item_count=counts[name]) for name in points]
    rows.sort(key=lambda row: (-row.points, row.name))

    return CategoryBreakdown(title=title, rows=rows, total_items=len(items), name_width=name_width)


def generate_category_report(items: Sequence[WorkItem], report_type: ReportType | str) -> str:
    """Render the story-points-by-category report for the given items."""
    breakdown = calculate_category_breakdown(items, report_type)
    logger.debug(
        "Category breakdown calculated",
        extra={"category": breakdown.title, "rows": len(breakdown.rows), "total_items": breakdown.total_items},
    )
    return render_report("metrics/breakdown.md.j2", metrics=breakdown)
