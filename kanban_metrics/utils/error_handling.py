"""
Error reporting helpers

Two ways a failure is surfaced while turning a board export into reports:

- log_and_continue: a single record is unusable (a CSV row without an id,
  a line with the wrong field count). The record is dropped, a warning
  names it, and the load carries on.
- log_and_raise: something failed that the command line cannot recover
  from. The failure is logged with its traceback and the exception
  propagates unchanged.

Both attach the same structured fields, which JSONFormatter writes out as
top-level keys:

    error_type       short name of the operation ("Row parsing")
    exception_class  class name of the caught exception
    context          caller-supplied details (row number, file path, ...)
"""

import logging
from typing import Any, NoReturn


def _failure_fields(error: Exception, context: dict[str, Any], error_type: str) -> dict[str, Any]:
    return {
        "error_type": error_type,
        "exception_class": type(error).__name__,
        "context": context,
    }


def log_and_continue(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
) -> None:
    """
    Warn about a dropped record and return so the caller can move on.

    Args:
        logger: Module logger
        error: The caught exception
        context: Where the record came from, e.g. {"row": 7, "path": "board.csv"}
        error_type: Operation name used in the message

    Example:
        try:
            items.append(self._parse_row(row))
        except ValueError as e:
            log_and_continue(logger, e, {"row": row_number}, "Row parsing")
    """
    logger.warning(f"{error_type} failed: {error}", extra=_failure_fields(error, context, error_type))


def log_and_raise(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
) -> NoReturn:
    """
    Log an unrecoverable failure with its traceback, then re-raise it.

    Raises:
        The original exception
    """
    logger.error(
        f"{error_type} failed critically: {error}",
        exc_info=True,
        extra=_failure_fields(error, context, error_type),
    )
    raise error
