"""
Tests for datetime utilities
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from kanban_metrics.domain import PeriodGranularity
from kanban_metrics.utils.datetime_utils import (
    bucket_key,
    days_between,
    ensure_utc,
    parse_board_timestamp,
    parse_cli_date,
    period_start,
)


class TestParseBoardTimestamp:
    """Test parse_board_timestamp function"""

    def test_export_format(self):
        """Test the board export format is read as UTC"""
        assert parse_board_timestamp("2024/05/07 03:49:34") == datetime(2024, 5, 7, 3, 49, 34, tzinfo=UTC)

    def test_iso_with_z(self):
        """Test ISO 8601 with Z suffix"""
        assert parse_board_timestamp("2024-05-07T03:49:34Z") == datetime(2024, 5, 7, 3, 49, 34, tzinfo=UTC)

    def test_iso_with_offset_keeps_instant(self):
        """Test an offset timestamp keeps its offset"""
        parsed = parse_board_timestamp("2024-05-07T05:49:34+02:00")
        assert parsed == datetime(2024, 5, 7, 3, 49, 34, tzinfo=UTC)

    def test_empty_returns_none(self):
        """Test blank input is absent, not an error"""
        assert parse_board_timestamp("") is None
        assert parse_board_timestamp(None) is None

    def test_invalid_raises(self):
        """Test garbage raises ValueError"""
        with pytest.raises(ValueError, match="Invalid timestamp format"):
            parse_board_timestamp("yesterday")


class TestParseCliDate:
    """Test parse_cli_date function"""

    def test_start_of_day(self):
        """Test plain dates parse to midnight UTC"""
        assert parse_cli_date("2024-04-01") == datetime(2024, 4, 1, tzinfo=UTC)

    def test_end_of_day(self):
        """Test end_of_day includes the whole day"""
        assert parse_cli_date("2024-04-30", end_of_day=True) == datetime(2024, 4, 30, 23, 59, 59, tzinfo=UTC)

    def test_invalid_raises(self):
        """Test wrong format raises a helpful ValueError"""
        with pytest.raises(ValueError, match="expected format YYYY-MM-DD"):
            parse_cli_date("04/01/2024")


class TestEnsureUtc:
    """Test ensure_utc function"""

    def test_naive_becomes_utc(self):
        """Test naive datetimes are tagged UTC"""
        assert ensure_utc(datetime(2024, 1, 1)).tzinfo is UTC

    def test_aware_unchanged(self):
        """Test aware datetimes pass through"""
        value = datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=2)))
        assert ensure_utc(value) is value


class TestDaysBetween:
    """Test days_between function"""

    def test_fractional_days(self):
        """Test half a day"""
        assert days_between(datetime(2024, 4, 1, tzinfo=UTC), datetime(2024, 4, 1, 12, tzinfo=UTC)) == 0.5

    def test_negative_when_reversed(self):
        """Test end before start gives a negative duration"""
        assert days_between(datetime(2024, 4, 3, tzinfo=UTC), datetime(2024, 4, 1, tzinfo=UTC)) == -2.0


class TestBucketKey:
    """Test bucket_key function"""

    def test_month_key(self):
        """Test calendar month key"""
        assert bucket_key(datetime(2024, 4, 10, tzinfo=UTC), PeriodGranularity.MONTH) == "2024-04"

    def test_week_key(self):
        """Test ISO week key is zero padded"""
        assert bucket_key(datetime(2024, 1, 10, tzinfo=UTC), PeriodGranularity.WEEK) == "2024-W02"

    def test_iso_week_year_boundary(self):
        """Test late December can belong to week 1 of the next ISO year"""
        assert bucket_key(datetime(2024, 12, 30, tzinfo=UTC), PeriodGranularity.WEEK) == "2025-W01"

    def test_early_january_in_previous_iso_year(self):
        """Test early January can belong to the last ISO week of the previous year"""
        assert bucket_key(datetime(2021, 1, 1, tzinfo=UTC), PeriodGranularity.WEEK) == "2020-W53"

    def test_keys_sort_chronologically(self):
        """Test week keys sort in time order"""
        dates = [datetime(2024, 3, 4, tzinfo=UTC), datetime(2024, 1, 8, tzinfo=UTC), datetime(2024, 11, 4, tzinfo=UTC)]
        keys = [bucket_key(d, PeriodGranularity.WEEK) for d in dates]
        assert sorted(keys) == ["2024-W02", "2024-W10", "2024-W45"]


class TestPeriodStart:
    """Test period_start function"""

    def test_month_start(self):
        """Test month start is day 1 at midnight"""
        result = period_start(datetime(2024, 4, 17, 15, 30, tzinfo=UTC), PeriodGranularity.MONTH)
        assert result == datetime(2024, 4, 1, tzinfo=UTC)

    def test_week_start_is_monday(self):
        """Test week start rewinds to Monday midnight"""
        # 2024-04-18 is a Thursday
        result = period_start(datetime(2024, 4, 18, 9, 0, tzinfo=UTC), PeriodGranularity.WEEK)
        assert result == datetime(2024, 4, 15, tzinfo=UTC)
        assert result.weekday() == 0

    def test_week_start_across_month(self):
        """Test week start can fall in the previous month"""
        result = period_start(datetime(2024, 5, 2, tzinfo=UTC), PeriodGranularity.WEEK)
        assert result == datetime(2024, 4, 29, tzinfo=UTC)

    def test_timezone_preserved(self):
        """Test the input offset is kept"""
        tz = timezone(timedelta(hours=-5))
        result = period_start(datetime(2024, 4, 17, 15, 30, tzinfo=tz), PeriodGranularity.MONTH)
        assert result.tzinfo is tz
        assert result == datetime(2024, 4, 1, tzinfo=tz)
