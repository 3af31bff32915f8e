"""
Configuration Management

Provides centralized, validated defaults for report generation, loaded from
environment variables (and a .env file when present). Command-line flags
override these defaults.

Usage:
    from kanban_metrics.core.config import get_config

    defaults = get_config().get_report_defaults()
    print(defaults.period)        # PeriodGranularity.MONTH
    print(defaults.ad_hoc_policy) # AdHocPolicy.INCLUDE

Environment variables:
    KANBAN_METRICS_PERIOD        week | month (default: month)
    KANBAN_METRICS_AD_HOC        include | exclude | only (default: include)
    KANBAN_METRICS_FILTER_FIELD  created_at | started_at | completed_at (default: completed_at)
    KANBAN_METRICS_DELIMITER     comma | tab | semicolon | auto (default: auto)
    KANBAN_METRICS_LOG_LEVEL     DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)

Raises:
    ConfigurationError: If a configured value is not valid
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from kanban_metrics.domain.types import AdHocPolicy, DateField, MetricsValidationError, PeriodGranularity

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_DELIMITERS = ("comma", "tab", "semicolon", "auto")


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class ReportDefaults:
    """
    Validated report generation defaults.

    Attributes:
        period: Default time bucketing
        ad_hoc_policy: Default treatment of ad-hoc requests
        date_field: Default date field for range filtering
        delimiter: Default CSV delimiter name
        log_level: Default log level name
    """

    period: PeriodGranularity | str = PeriodGranularity.MONTH
    ad_hoc_policy: AdHocPolicy | str = AdHocPolicy.INCLUDE
    date_field: DateField | str = DateField.COMPLETION
    delimiter: str = "auto"
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate and normalize the defaults.

        Raises:
            ConfigurationError: If any value is invalid
        """
        try:
            self.period = PeriodGranularity.parse(self.period)
            self.ad_hoc_policy = AdHocPolicy.parse(self.ad_hoc_policy)
            self.date_field = DateField.parse(self.date_field)
        except MetricsValidationError as e:
            raise ConfigurationError(str(e)) from e

        if self.delimiter not in VALID_DELIMITERS:
            raise ConfigurationError(
                f"KANBAN_METRICS_DELIMITER must be one of {', '.join(VALID_DELIMITERS)}: {self.delimiter}"
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"KANBAN_METRICS_LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}: {self.log_level}"
            )


class AppConfig:
    """
    Centralized configuration manager.

    Loads and validates application configuration from environment variables.
    Provides fail-fast behavior to catch configuration issues early.
    """

    def __init__(self):
        """Initialize configuration (loads .env file)."""
        load_dotenv()

    def get_report_defaults(self) -> ReportDefaults:
        """
        Get validated report defaults.

        Returns:
            ReportDefaults: Validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        return ReportDefaults(
            period=os.getenv("KANBAN_METRICS_PERIOD", "month"),
            ad_hoc_policy=os.getenv("KANBAN_METRICS_AD_HOC", "include"),
            date_field=os.getenv("KANBAN_METRICS_FILTER_FIELD", "completed_at"),
            delimiter=os.getenv("KANBAN_METRICS_DELIMITER", "auto"),
            log_level=os.getenv("KANBAN_METRICS_LOG_LEVEL", "INFO"),
        )


# Convenience function for getting configuration
_config_instance: AppConfig | None = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        AppConfig: Global configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration instance (used by tests)."""
    global _config_instance
    _config_instance = None
