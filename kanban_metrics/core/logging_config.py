"""
Logging setup for kanban-metrics.

Report text is written to stdout, so every log line goes to stderr (and,
optionally, to a JSON log file). Modules log with ``extra={...}``; those
fields show up as keys in JSON output and as ``key=value`` pairs on the
console.

Usage:
    from kanban_metrics.core.logging_config import get_logger, setup_logging

    setup_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("Loaded work items", extra={"rows": 120, "skipped": 2})
"""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Attributes every LogRecord has; anything else came from extra={...}
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "extra_fields"}

_NOISY_LIBRARIES = ("jinja2",)


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """
    Structured fields attached to a record.

    Combines keys passed through ``extra={...}`` with the ``extra_fields``
    mapping set by log_with_context.
    """
    fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
    fields.update(getattr(record, "extra_fields", {}))
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log files and log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(record_fields(record))
        return json.dumps(log_data, default=str)


class ContextFormatter(logging.Formatter):
    """
    Console formatter: colour-coded level (on a terminal) and trailing
    ``key=value`` context.
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if sys.stderr.isatty():
            record.levelname = f"{self.COLORS.get(levelname, '')}{levelname}{self.RESET}"

        try:
            text = super().format(record)
        finally:
            record.levelname = levelname

        fields = record_fields(record)
        if fields:
            text += " [" + " ".join(f"{key}={value}" for key, value in fields.items()) + "]"
        return text


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_output: bool = False,
) -> None:
    """
    Configure the root logger for a command-line run.

    Replaces any existing root handlers with a stderr console handler and,
    when log_file is given, a JSON file handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path for JSON log output (parent directories are created)
        json_output: Use JSON on the console as well

    Example:
        setup_logging(level="INFO", log_file=Path(".tmp/logs/kanban_metrics.log"))
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    if json_output:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ContextFormatter(fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass __name__)."""
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any) -> None:
    """
    Log message with keyword context fields.

    Example:
        log_with_context(logger, "info", "Generating metrics report", metrics_type="flow", item_count=42)
    """
    log_func = getattr(logger, level.lower())
    log_func(message, extra={"extra_fields": context})
