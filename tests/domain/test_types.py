"""
Tests for vocabulary types
"""

import pytest

from kanban_metrics.domain import (
    AdHocPolicy,
    DateField,
    MetricsType,
    MetricsValidationError,
    PeriodGranularity,
    ReportType,
)


class TestMetricsType:
    """Test MetricsType vocabulary"""

    def test_spellings(self):
        """Test the seven external spellings in order"""
        assert MetricsType.spellings() == [
            "lead-time",
            "throughput",
            "flow",
            "estimation",
            "age",
            "improvement",
            "all",
        ]

    @pytest.mark.parametrize("spelling", ["lead-time", "throughput", "flow", "estimation", "age", "improvement", "all"])
    def test_round_trip(self, spelling):
        """Test parse then str returns the exact spelling"""
        assert str(MetricsType.parse(spelling)) == spelling

    def test_parse_member_passthrough(self):
        """Test a member parses to itself"""
        assert MetricsType.parse(MetricsType.FLOW) is MetricsType.FLOW

    def test_unknown_raises(self):
        """Test unknown metrics types are rejected with the valid options"""
        with pytest.raises(MetricsValidationError, match="invalid metrics type: velocity") as exc_info:
            MetricsType.parse("velocity")
        assert "lead-time" in str(exc_info.value)

    def test_parse_is_case_sensitive(self):
        """Test spellings are not coerced"""
        with pytest.raises(MetricsValidationError):
            MetricsType.parse("Lead-Time")

    def test_validation_error_is_value_error(self):
        """Test callers can catch ValueError"""
        with pytest.raises(ValueError):
            MetricsType.parse("")


class TestOtherVocabularies:
    """Test PeriodGranularity, DateField and AdHocPolicy"""

    def test_period_granularity(self):
        """Test period spellings"""
        assert PeriodGranularity.parse("week") is PeriodGranularity.WEEK
        assert PeriodGranularity.parse("month") is PeriodGranularity.MONTH
        with pytest.raises(MetricsValidationError, match="invalid period type: quarter"):
            PeriodGranularity.parse("quarter")

    def test_date_field(self):
        """Test date field spellings match the export column names"""
        assert DateField.parse("created_at") is DateField.CREATION
        assert DateField.parse("started_at") is DateField.START
        assert DateField.parse("completed_at") is DateField.COMPLETION
        with pytest.raises(MetricsValidationError, match="invalid filter field: updated_at"):
            DateField.parse("updated_at")

    def test_ad_hoc_policy(self):
        """Test ad-hoc policy spellings"""
        assert [str(p) for p in AdHocPolicy] == ["include", "exclude", "only"]
        with pytest.raises(MetricsValidationError, match="invalid ad-hoc filter type: some"):
            AdHocPolicy.parse("some")

    def test_report_type(self):
        """Test category report spellings"""
        assert ReportType.spellings() == ["contributor", "epic", "team", "product-area"]
        assert ReportType.parse("product-area") is ReportType.PRODUCT_AREA
        with pytest.raises(MetricsValidationError, match="invalid report type: product_area"):
            ReportType.parse("product_area")

    def test_members_compare_equal_to_spellings(self):
        """Test members behave as their string values"""
        assert PeriodGranularity.WEEK == "week"
        assert f"{DateField.COMPLETION}" == "completed_at"
