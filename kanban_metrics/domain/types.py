"""
Vocabulary types for the metrics engine

Closed enumerations whose string spellings form the external contract of the
engine (command-line flags, environment defaults, report headers):
    - MetricsType: which report to generate
    - PeriodGranularity: time bucketing for series data
    - DateField: which timestamp drives date-range filtering
    - AdHocPolicy: how ad-hoc requests are treated
    - ReportType: which category breakdown to generate

Every enum parses only its exact spellings; anything else raises
MetricsValidationError.
"""

from enum import StrEnum
from typing import Self


class MetricsValidationError(ValueError):
    """Raised when a selector or date range supplied to the engine is invalid."""

    pass


class Vocabulary(StrEnum):
    """Base for string-valued vocabularies with strict parsing."""

    @classmethod
    def parse(cls, value: "str | Self") -> Self:
        """
        Convert a string (or an existing member) to a member of this enum.

        Args:
            value: Exact spelling of a member, or a member

        Returns:
            Matching enum member

        Raises:
            MetricsValidationError: If value is not one of the valid spellings
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise MetricsValidationError(
            f"invalid {cls._label()}: {value} (must be one of: {', '.join(cls.spellings())})"
        )

    @classmethod
    def spellings(cls) -> list[str]:
        """Return the valid string spellings in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def _label(cls) -> str:
        return cls.__name__


class MetricsType(Vocabulary):
    """Report selector."""

    LEAD_TIME = "lead-time"
    THROUGHPUT = "throughput"
    FLOW = "flow"
    ESTIMATION = "estimation"
    AGE = "age"
    IMPROVEMENT = "improvement"
    ALL = "all"

    @classmethod
    def _label(cls) -> str:
        return "metrics type"


class PeriodGranularity(Vocabulary):
    """Time bucket size for series data (month key YYYY-MM, ISO week key YYYY-Wnn)."""

    WEEK = "week"
    MONTH = "month"

    @classmethod
    def _label(cls) -> str:
        return "period type"


class DateField(Vocabulary):
    """Timestamp on a work item used for date-range filtering."""

    CREATION = "created_at"
    START = "started_at"
    COMPLETION = "completed_at"

    @classmethod
    def _label(cls) -> str:
        return "filter field"


class AdHocPolicy(Vocabulary):
    """Treatment of items labelled as ad-hoc requests."""

    INCLUDE = "include"
    EXCLUDE = "exclude"
    ONLY = "only"

    @classmethod
    def _label(cls) -> str:
        return "ad-hoc filter type"


class ReportType(Vocabulary):
    """Category breakdown selector (story points grouped by a card attribute)."""

    CONTRIBUTOR = "contributor"
    EPIC = "epic"
    TEAM = "team"
    PRODUCT_AREA = "product-area"

    @classmethod
    def _label(cls) -> str:
        return "report type"
