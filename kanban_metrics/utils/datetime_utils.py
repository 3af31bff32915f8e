#!/usr/bin/env python3
"""
Datetime Utility Functions

Centralized datetime parsing, duration and period-bucketing functions shared
by the loader, the filter and the report generators.

Handles common patterns:
- Board export timestamps ("2024/05/07 03:49:34") and ISO 8601 strings
- Command-line dates ("2024-05-07")
- Durations in fractional days
- Period keys: calendar month ("2024-05") and ISO week ("2024-W19")
"""

from datetime import UTC, datetime, time, timedelta

from kanban_metrics.domain.constants import ingestion_config, metrics_config
from kanban_metrics.domain.types import PeriodGranularity


def ensure_utc(value: datetime) -> datetime:
    """
    Return an aware datetime, interpreting naive values as UTC.

    Args:
        value: Naive or aware datetime

    Returns:
        The same instant as an aware datetime (aware inputs are returned unchanged)
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def parse_board_timestamp(timestamp_str: str | None) -> datetime | None:
    """
    Parse a timestamp from a board export.

    Accepts the export format "YYYY/MM/DD HH:MM:SS" and, as a fallback,
    ISO 8601 (with or without a 'Z' suffix). Naive results are taken as UTC.

    Args:
        timestamp_str: Timestamp text, or None

    Returns:
        Aware datetime, or None if input is empty

    Raises:
        ValueError: If the text matches neither format

    Examples:
        >>> parse_board_timestamp("2024/05/07 03:49:34")
        datetime.datetime(2024, 5, 7, 3, 49, 34, tzinfo=datetime.timezone.utc)

        >>> parse_board_timestamp("")
        None
    """
    if not timestamp_str:
        return None

    text = timestamp_str.strip()
    try:
        return datetime.strptime(text, ingestion_config.TIMESTAMP_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        pass

    try:
        return ensure_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError as e:
        raise ValueError(f"Invalid timestamp format: {timestamp_str}") from e


def parse_cli_date(date_str: str, end_of_day: bool = False) -> datetime:
    """
    Parse a YYYY-MM-DD command-line date as a UTC instant.

    Args:
        date_str: Date text
        end_of_day: If True, return 23:59:59 of that day so the date is inclusive

    Returns:
        Aware datetime at midnight (or end of day) UTC

    Raises:
        ValueError: If the text is not a valid YYYY-MM-DD date

    Examples:
        >>> parse_cli_date("2024-04-30", end_of_day=True)
        datetime.datetime(2024, 4, 30, 23, 59, 59, tzinfo=datetime.timezone.utc)
    """
    try:
        day = datetime.strptime(date_str, ingestion_config.CLI_DATE_FORMAT)
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_str}', expected format YYYY-MM-DD") from e

    if end_of_day:
        day = datetime.combine(day.date(), time(23, 59, 59))
    return day.replace(tzinfo=UTC)


def days_between(start: datetime, end: datetime) -> float:
    """
    Elapsed time from start to end in fractional days.

    Negative when end precedes start; callers decide how to treat that.

    Examples:
        >>> days_between(datetime(2024, 4, 1, tzinfo=UTC), datetime(2024, 4, 1, 12, tzinfo=UTC))
        0.5
    """
    return (end - start).total_seconds() / metrics_config.SECONDS_PER_DAY


def bucket_key(timestamp: datetime, granularity: PeriodGranularity) -> str:
    """
    Map a timestamp to its period key.

    Month keys are "YYYY-MM". Week keys are ISO 8601 "YYYY-Wnn" where the year
    is the ISO week-year, which can differ from the calendar year around New
    Year (2024-12-30 is in 2025-W01).

    Args:
        timestamp: Instant to bucket
        granularity: Week or month

    Returns:
        Period key string that sorts chronologically
    """
    if granularity == PeriodGranularity.WEEK:
        iso_year, iso_week, _ = timestamp.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return timestamp.strftime("%Y-%m")


def period_start(timestamp: datetime, granularity: PeriodGranularity) -> datetime:
    """
    Rewind a timestamp to the start of its period.

    Weeks start on Monday at midnight (matching ISO week keys); months start
    on day 1 at midnight. The timezone of the input is preserved.

    Args:
        timestamp: Instant inside the period
        granularity: Week or month

    Returns:
        Start of the period containing timestamp
    """
    midnight = timestamp.replace(hour=0, minute=0, second=0, microsecond=0)
    if granularity == PeriodGranularity.WEEK:
        return midnight - timedelta(days=timestamp.weekday())
    return midnight.replace(day=1)
