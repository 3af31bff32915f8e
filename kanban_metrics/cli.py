"""
Command-line entry point for kanban-metrics.

Loads a board export, generates the requested metrics report (--metrics) or
category breakdown (--report) and prints it to stdout (or writes it to
--output). Logging goes to stderr so the report text can be piped.

Usage:
    kanban-metrics --csv board.csv --metrics lead-time --last 90
    kanban-metrics --csv board.csv --metrics throughput --period week --start 2024-01-01 --end 2024-03-31
    kanban-metrics --csv board.csv --metrics all --ad-hoc exclude --output reports/metrics.md
    kanban-metrics --csv board.csv --report contributor --start 2024-04-01
"""

import argparse
import sys
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path

from kanban_metrics.collectors import Delimiter, load_work_items
from kanban_metrics.core import ConfigurationError, ReportDefaults, get_config, get_logger, setup_logging
from kanban_metrics.domain import (
    AdHocPolicy,
    DateField,
    MetricsType,
    MetricsValidationError,
    PeriodGranularity,
    ReportType,
)
from kanban_metrics.metrics import DateRange, MetricsGenerator
from kanban_metrics.utils.datetime_utils import parse_cli_date
from kanban_metrics.utils.error_handling import log_and_raise

logger = get_logger(__name__)


def parse_arguments(argv: Sequence[str] | None = None, defaults: ReportDefaults | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments (default: sys.argv[1:])
        defaults: Environment-derived defaults for optional flags

    Returns:
        Namespace: Parsed arguments
    """
    defaults = defaults or ReportDefaults()

    parser = argparse.ArgumentParser(
        prog="kanban-metrics",
        description="Generate delivery metrics reports (lead time, throughput, flow, ...) or story-point "
        "breakdowns from a kanban board export",
    )

    parser.add_argument("--csv", type=str, required=True, help="Path to the kanban CSV file")
    parser.add_argument(
        "--metrics",
        type=str,
        default=None,
        help=f"Type of metrics: {', '.join(MetricsType.spellings())}",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help=f"Story points by category: {', '.join(ReportType.spellings())} (instead of --metrics)",
    )
    parser.add_argument(
        "--period",
        type=str,
        default=str(defaults.period),
        help=f"Time period for reports: {', '.join(PeriodGranularity.spellings())} (default: {defaults.period})",
    )
    parser.add_argument("--start", type=str, default=None, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", type=str, default=None, help="End date (YYYY-MM-DD), inclusive")
    parser.add_argument(
        "--last",
        type=int,
        default=0,
        help="Report on the last N days (takes precedence over --start/--end)",
    )
    parser.add_argument("--output", type=str, default=None, help="Path to save the report (optional)")
    parser.add_argument(
        "--delimiter",
        type=str,
        default=defaults.delimiter,
        help=f"CSV delimiter: {', '.join(Delimiter.spellings())} (default: {defaults.delimiter})",
    )
    parser.add_argument(
        "--ad-hoc",
        dest="ad_hoc",
        type=str,
        default=str(defaults.ad_hoc_policy),
        help=f"How to handle ad-hoc requests: {', '.join(AdHocPolicy.spellings())} "
        f"(default: {defaults.ad_hoc_policy})",
    )
    parser.add_argument(
        "--filter-field",
        dest="filter_field",
        type=str,
        default=str(defaults.date_field),
        help=f"Date field to filter by: {', '.join(DateField.spellings())} (default: {defaults.date_field})",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str,
        default=defaults.log_level,
        help=f"Log level (default: {defaults.log_level})",
    )
    parser.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as JSON on stderr")

    return parser.parse_args(argv)


def resolve_date_range(args: argparse.Namespace, now: datetime | None = None) -> DateRange:
    """
    Build the date range from --last or --start/--end.

    --last N wins over explicit dates: the range ends now and starts N days
    earlier. An explicit --end includes the whole day (until 23:59:59).

    Raises:
        MetricsValidationError: If --last is negative or end precedes start
        ValueError: If a date is not in YYYY-MM-DD format
    """
    if args.last < 0:
        raise MetricsValidationError(f"last N days must be a positive number, got: {args.last}")

    if args.last > 0:
        end = now or datetime.now(UTC)
        return DateRange(start=end - timedelta(days=args.last), end=end)

    start = parse_cli_date(args.start) if args.start else None
    end = parse_cli_date(args.end, end_of_day=True) if args.end else None
    return DateRange(start=start, end=end)


def resolve_selection(args: argparse.Namespace) -> MetricsType | ReportType:
    """
    Pick the metrics report or category breakdown to generate.

    Exactly one of --metrics and --report must be given.

    Raises:
        MetricsValidationError: If neither or both are given, or the value is invalid
    """
    if (args.metrics is None) == (args.report is None):
        raise MetricsValidationError("specify exactly one of --metrics or --report")
    if args.report is not None:
        return ReportType.parse(args.report)
    return MetricsType.parse(args.metrics)


def write_output(text: str, path: Path) -> None:
    """Write the report, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the command line.

    Returns:
        Process exit code (0 on success, 1 on invalid input or unreadable data)
    """
    try:
        defaults = get_config().get_report_defaults()
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"Configuration error: {e}")
        return 1

    args = parse_arguments(argv, defaults)
    setup_logging(level=args.log_level, json_output=args.json_logs)

    try:
        date_range = resolve_date_range(args)
        # Validate selectors before reading the file
        selection = resolve_selection(args)
        period = PeriodGranularity.parse(args.period)
        date_field = DateField.parse(args.filter_field)
        ad_hoc_policy = AdHocPolicy.parse(args.ad_hoc)
        delimiter = Delimiter.parse(args.delimiter)

        logger.info(f"Loading kanban data from: {args.csv}")
        items = load_work_items(args.csv, delimiter)
    except (ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1

    generator = MetricsGenerator(items)
    try:
        if isinstance(selection, ReportType):
            report = generator.generate_breakdown(selection, date_range, date_field, ad_hoc_policy)
        else:
            report = generator.generate(selection, period, date_range, date_field, ad_hoc_policy)
    except Exception as e:
        log_and_raise(logger, e, {"selection": str(selection), "csv": args.csv}, "Metrics generation")

    if args.output:
        output_path = Path(args.output)
        try:
            write_output(report, output_path)
        except OSError as e:
            logger.error(f"Error writing output to file: {e}")
            return 1
        logger.info(f"Output saved to: {output_path}")
    else:
        sys.stdout.write(report if report.endswith("\n") else report + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
