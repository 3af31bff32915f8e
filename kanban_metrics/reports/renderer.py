"""
Report rendering with Jinja2

Each report has a template under templates/metrics/ that receives one
structured result as ``metrics``. Column alignment is done with the ``fixed``
filter; the story-point size table is a shared macro in _tables.md.j2.

Usage:
    from kanban_metrics.reports.renderer import render_report

    text = render_report("metrics/throughput.md.j2", metrics=throughput_metrics)
"""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from kanban_metrics.core import get_logger
from kanban_metrics.domain.reports import Delta

logger = get_logger(__name__)

_jinja_env: Environment | None = None


def get_jinja_environment() -> Environment:
    """
    Get or create the Jinja2 environment (singleton pattern).

    Initializes Jinja2 with:
    - Auto-escaping only for HTML/XML (report templates are plain text)
    - Custom filters for number/percent/date/delta formatting
    - Trim blocks and lstrip for clean output
    - Trailing newlines kept, so every report ends with a newline

    :returns: Configured Jinja2 Environment with custom filters registered

    Example:
        >>> env = get_jinja_environment()
        >>> template = env.get_template('metrics/flow.md.j2')
    """
    global _jinja_env

    if _jinja_env is None:
        # Find templates directory (relative to this file)
        template_dir = Path(__file__).parent.parent / "templates"

        _jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        # Add custom filters
        _jinja_env.filters["fixed"] = fixed
        _jinja_env.filters["format_percent"] = format_percent
        _jinja_env.filters["format_date"] = format_date
        _jinja_env.filters["signed_delta"] = signed_delta

        logger.debug("Jinja2 environment initialized", extra={"template_dir": str(template_dir)})

    return _jinja_env


def render_report(template_name: str, **context: Any) -> str:
    """
    Render a report template with context data.

    :param template_name: Template file name relative to templates/ directory
        (e.g., 'metrics/lead_time.md.j2')
    :param context: Template variables (usually a single structured result as ``metrics``)
    :returns: Rendered report text
    :raises jinja2.TemplateNotFound: If template file doesn't exist
    :raises jinja2.TemplateSyntaxError: If template has syntax errors

    Example:
        >>> text = render_report('metrics/flow.md.j2', metrics=flow_efficiency)
        >>> text.startswith('# Flow Efficiency Analysis')
        True
    """
    env = get_jinja_environment()
    template = env.get_template(template_name)

    rendered: str = template.render(**context)
    return rendered


# Custom Jinja2 filters


def fixed(value: Any, width: int = 0, decimals: int = 1) -> str:
    """
    Format a number right-aligned in a fixed-width column (Jinja2 filter).

    :param value: Numeric value
    :param width: Minimum field width (default: 0, no padding)
    :param decimals: Number of decimal places (default: 1)
    :returns: Formatted string, e.g. ``fixed(3.14159, 6, 2)`` -> ``"  3.14"``

    Example:
        In Jinja2 template:
        {{ row.count|fixed(5, 0) }} -> "    3"
        {{ row.stats.mean|fixed(3) }} -> "4.5"
    """
    try:
        num = float(value)
        return f"{num:{width}.{decimals}f}"
    except (ValueError, TypeError):
        return f"{value!s:>{width}}"


def format_percent(value: float | None, decimals: int = 1) -> str:
    """
    Percentage with a trailing % sign (Jinja2 filter).

    :param value: Percentage on a 0-100 scale; None renders as "n/a"
    :param decimals: Digits after the decimal point (default: 1)
    :returns: e.g. ``format_percent(71.875)`` -> ``"71.9%"``
    """
    if value is None:
        return "n/a"
    return f"{value:.{decimals}f}%"


def format_date(value: datetime, format_str: str = "%Y-%m-%d") -> str:
    """
    Render a timestamp in UTC (Jinja2 filter).

    Report timestamps are always shown in UTC; naive values are taken as UTC.

    :param value: Timestamp to render
    :param format_str: strftime pattern (default: ``%Y-%m-%d``)
    :returns: e.g. ``"2024-06-01 12:00"`` for ``format_str="%Y-%m-%d %H:%M"``
    """
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime(format_str)


def signed_delta(delta: Delta | None, width: int = 0) -> str:
    """
    Format a month-over-month change (Jinja2 filter).

    :param delta: Change versus the previous month, or None for the first month
    :param width: Minimum field width, right-aligned (default: 0)
    :returns: ``"+1.5 (+12.0%)"``, ``"+1.5"`` when the percentage is undefined,
        or an empty (padded) string for no delta

    Example:
        >>> signed_delta(Delta(absolute=-2.0, percent=-20.0))
        '-2.0 (-20.0%)'
        >>> signed_delta(None, 4)
        '    '
    """
    if delta is None:
        text = ""
    elif delta.percent is None:
        text = f"{delta.absolute:+.1f}"
    else:
        text = f"{delta.absolute:+.1f} ({delta.percent:+.1f}%)"
    return f"{text:>{width}}"
