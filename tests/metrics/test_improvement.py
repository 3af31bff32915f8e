"""
Tests for the team improvement report
"""

import pytest
from conftest import utc

from kanban_metrics.domain import Delta
from kanban_metrics.metrics import calculate_delta, calculate_team_improvement, generate_improvement_report


class TestCalculateDelta:
    """Test calculate_delta function"""

    def test_decrease(self):
        """Test absolute and relative decrease"""
        assert calculate_delta(8.0, 10.0) == Delta(absolute=-2.0, percent=-20.0)

    def test_previous_zero(self):
        """Test the percentage is undefined when the previous value is 0"""
        assert calculate_delta(4.0, 0.0) == Delta(absolute=4.0, percent=None)


class TestCalculateTeamImprovement:
    """Test calculate_team_improvement function"""

    def test_monthly_rows(self, april_may_items):
        """Test counts, points and averages per month"""
        improvement = calculate_team_improvement(april_may_items)

        april = improvement.month("2024-04")
        may = improvement.month("2024-05")
        assert [row.month for row in improvement.months] == ["2024-04", "2024-05"]
        assert (april.item_count, april.story_points) == (2, 5.0)
        assert (april.avg_lead_time, april.avg_cycle_time) == (9.5, 5.5)
        assert (may.avg_lead_time, may.median_lead_time) == (6.5, 6.5)
        assert may.avg_cycle_time == 10.0

    def test_deltas(self, april_may_items):
        """Test month-over-month change, none for the first month"""
        improvement = calculate_team_improvement(april_may_items)
        april, may = improvement.months

        assert april.lead_time_delta is None
        assert april.cycle_time_delta is None
        assert may.lead_time_delta.absolute == -3.0
        assert may.lead_time_delta.percent == pytest.approx(-31.5789, abs=1e-3)
        assert may.cycle_time_delta.absolute == 4.5

    def test_month_without_cycle_times(self, make_item):
        """Test a month with no cycle data averages 0 and has no percentage delta after it"""
        items = [
            make_item(is_completed=True, created_at=utc(2024, 4, 1), completed_at=utc(2024, 4, 3)),
            make_item(
                is_completed=True,
                created_at=utc(2024, 5, 1),
                started_at=utc(2024, 5, 2),
                completed_at=utc(2024, 5, 4),
            ),
        ]
        april, may = calculate_team_improvement(items).months

        assert april.avg_cycle_time == 0.0
        assert may.cycle_time_delta == Delta(absolute=2.0, percent=None)

    def test_gap_months_compare_with_previous_present_month(self, make_item):
        """Test deltas skip over months without completions"""
        items = [
            make_item(is_completed=True, created_at=utc(2024, 1, 1), completed_at=utc(2024, 1, 5)),
            make_item(is_completed=True, created_at=utc(2024, 3, 1), completed_at=utc(2024, 3, 3)),
        ]
        improvement = calculate_team_improvement(items)

        assert [row.month for row in improvement.months] == ["2024-01", "2024-03"]
        assert improvement.months[1].lead_time_delta == Delta(absolute=-2.0, percent=-50.0)


class TestGenerateImprovementReport:
    """Test improvement report rendering"""

    def test_tables(self, april_may_items):
        """Test both tables and formatted deltas"""
        text = generate_improvement_report(april_may_items)

        assert text.startswith("# Team Improvement Metrics")
        assert "## Statistical Trends" in text
        assert "-3.0 (-31.6%)" in text
        assert "+4.5 (+81.8%)" in text

    def test_first_month_has_blank_deltas(self, april_may_items):
        """Test the first month row ends with empty delta cells"""
        lines = generate_improvement_report(april_may_items).splitlines()
        april = next(line for line in lines if line.startswith("2024-04 |"))
        cells = [cell.strip() for cell in april.split("|")]
        assert cells[-2:] == ["", ""]
