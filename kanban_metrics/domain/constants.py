#!/usr/bin/env python3
"""
Application Constants

Centralized configuration constants for metrics calculation, report layout and
board ingestion. Provides type-safe, immutable configuration values used across
the generators, the loader and the command line.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricsConfig:
    """
    Metrics calculation constants.

    Immutable configuration for story-point bucketing, correlation bands and
    report layout.

    Attributes:
        CANONICAL_POINT_SIZES: Reference story-point scale used to bucket estimates
        AD_HOC_LABEL: Label (compared case-insensitively) marking unplanned work
        OLDEST_ITEMS_LIMIT: Oldest items listed per workflow state in the age report
        SEPARATOR_WIDTH: Width of the '=' line between reports in an "all" run
        STRONG_CORRELATION: Lower bound of the "strong" correlation band
        MODERATE_CORRELATION: Lower bound of the "moderate" correlation band
        SECONDS_PER_DAY: Conversion factor for durations

    Example:
        >>> config = metrics_config
        >>> print(config.CANONICAL_POINT_SIZES)
        (1.0, 2.0, 3.0, 5.0, 8.0, 13.0, 21.0)
    """

    CANONICAL_POINT_SIZES: tuple[float, ...] = (1.0, 2.0, 3.0, 5.0, 8.0, 13.0, 21.0)
    """Fibonacci-like story point scale, ascending"""

    AD_HOC_LABEL: str = "ad-hoc-request"
    """Label identifying ad-hoc (out-of-process) work"""

    OLDEST_ITEMS_LIMIT: int = 5
    """Number of oldest items listed per state"""

    SEPARATOR_WIDTH: int = 80
    """Width of the separator line between combined reports"""

    STRONG_CORRELATION: float = 0.7
    """Correlation at or above this value is strong"""

    MODERATE_CORRELATION: float = 0.4
    """Correlation at or above this value (and below strong) is moderate"""

    SECONDS_PER_DAY: int = 86400
    """Seconds in a day"""


@dataclass(frozen=True)
class IngestionConfig:
    """
    Board snapshot ingestion constants.

    Attributes:
        REQUIRED_COLUMNS: Header columns that must be present in the CSV export
        TIMESTAMP_FORMAT: strftime format used by the board export
        DELIMITER_SAMPLE_BYTES: Bytes read from the file head for delimiter detection
        DELIMITER_SAMPLE_LINES: Lines of the sample inspected for delimiter detection
        CLI_DATE_FORMAT: Format of --start/--end command-line dates
    """

    REQUIRED_COLUMNS: tuple[str, ...] = ("id", "name", "estimate", "is_completed", "completed_at")
    """Minimum columns needed to build work items"""

    TIMESTAMP_FORMAT: str = "%Y/%m/%d %H:%M:%S"
    """Export timestamp format, e.g. 2024/05/07 03:49:34"""

    DELIMITER_SAMPLE_BYTES: int = 4 * 1024
    """4KB sample for delimiter auto-detection"""

    DELIMITER_SAMPLE_LINES: int = 5
    """Lines of the sample used for delimiter auto-detection"""

    CLI_DATE_FORMAT: str = "%Y-%m-%d"
    """Command-line date format"""


# Singleton instances for convenient access
metrics_config = MetricsConfig()
ingestion_config = IngestionConfig()
