"""
Statistics Utilities

Shared statistical functions for metrics calculations.
Eliminates duplication of summary/correlation logic across report generators.

Usage:
    from kanban_metrics.utils.statistics import calculate_summary_stats, nearest_canonical_size

    stats = calculate_summary_stats(lead_times)
    size = nearest_canonical_size(item.estimate)
"""

import logging
import math
from collections.abc import Sequence

from kanban_metrics.domain.constants import metrics_config
from kanban_metrics.domain.reports import SummaryStats

# Set up logger
logger = logging.getLogger(__name__)


def calculate_summary_stats(data: Sequence[float]) -> SummaryStats:
    """
    Calculate min, max, mean and median.

    The median is taken over a sorted copy; the input is never reordered.
    For an even number of values the median is the mean of the two middle values.

    Args:
        data: Sequence of numeric values

    Returns:
        SummaryStats(minimum, maximum, mean, median); all 0.0 for empty data

    Example:
        >>> calculate_summary_stats([1, 2, 3, 4])
        SummaryStats(minimum=1.0, maximum=4.0, mean=2.5, median=2.5)
    """
    if not data:
        return SummaryStats(0.0, 0.0, 0.0, 0.0)

    sorted_data = sorted(data)
    n = len(sorted_data)
    middle = n // 2

    if n % 2 == 0:
        median = (sorted_data[middle - 1] + sorted_data[middle]) / 2
    else:
        median = sorted_data[middle]

    return SummaryStats(
        minimum=float(sorted_data[0]),
        maximum=float(sorted_data[-1]),
        mean=float(sum(data) / n),
        median=float(median),
    )


def calculate_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Calculate the Pearson correlation coefficient between two paired series.

    Uses the sum formula:
        (n*Sxy - Sx*Sy) / sqrt((n*Sxx - Sx^2) * (n*Syy - Sy^2))

    Args:
        x: First series
        y: Second series, same length as x

    Returns:
        Correlation in [-1, 1]; 0.0 for mismatched lengths, empty input or
        zero variance in either series

    Example:
        >>> calculate_correlation([1, 3, 5], [1, 3, 5])
        1.0
    """
    if len(x) != len(y) or not x:
        return 0.0

    n = float(len(x))
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(a * b for a, b in zip(x, y, strict=True))
    sum_x2 = sum(a * a for a in x)
    sum_y2 = sum(b * b for b in y)

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)

    # Constant series can round to a tiny negative product
    if variance_product <= 0:
        return 0.0

    return numerator / math.sqrt(variance_product)


def nearest_canonical_size(
    estimate: float, sizes: Sequence[float] = metrics_config.CANONICAL_POINT_SIZES
) -> float:
    """
    Map an estimate to the nearest canonical story-point size.

    Scans sizes in ascending order and only replaces the best match on a
    strictly smaller distance, so exact ties resolve to the smaller size.

    Args:
        estimate: Raw estimate (story points)
        sizes: Ascending canonical sizes

    Returns:
        Closest size, or 0.0 for an estimate of exactly 0 (unsized)

    Example:
        >>> nearest_canonical_size(4.2)
        5.0
        >>> nearest_canonical_size(4)
        3.0
    """
    if estimate == 0:
        return 0.0

    closest = sizes[0]
    min_diff = abs(estimate - closest)

    for size in sizes:
        diff = abs(estimate - size)
        if diff < min_diff:
            min_diff = diff
            closest = size

    return float(closest)


def interpret_correlation(correlation: float) -> str:
    """
    Classify a correlation coefficient into an interpretation band.

    Args:
        correlation: Pearson coefficient

    Returns:
        "strong" (>= 0.7), "moderate" (>= 0.4), "weak" (>= 0) or "inverse" (< 0)
    """
    if correlation < 0:
        return "inverse"
    if correlation >= metrics_config.STRONG_CORRELATION:
        return "strong"
    if correlation >= metrics_config.MODERATE_CORRELATION:
        return "moderate"
    return "weak"
