"""
Board Snapshot Loader

Reads a board export (comma, tab or semicolon delimited) into WorkItem
records. Handles delimiter auto-detection and field coercion; rows that fail
validation are logged and skipped so one bad row never aborts a load.

Functions:
    detect_delimiter: Guess the delimiter from a sample of the file
    parse_owners: Split an owners cell into individual owners
    load_work_items: Convenience wrapper around CSVBoardLoader
"""

import math
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from kanban_metrics.core import get_logger
from kanban_metrics.domain import WorkItem
from kanban_metrics.domain.constants import ingestion_config
from kanban_metrics.domain.types import Vocabulary
from kanban_metrics.utils.datetime_utils import parse_board_timestamp
from kanban_metrics.utils.error_handling import log_and_continue

logger = get_logger(__name__)


class Delimiter(Vocabulary):
    """Field delimiter of a board export."""

    COMMA = "comma"
    TAB = "tab"
    SEMICOLON = "semicolon"
    AUTO = "auto"

    @classmethod
    def _label(cls) -> str:
        return "delimiter type"

    @property
    def char(self) -> str:
        """Separator character (AUTO reads as comma until detection runs)."""
        return _DELIMITER_CHARS[self]


_DELIMITER_CHARS = {
    Delimiter.COMMA: ",",
    Delimiter.TAB: "\t",
    Delimiter.SEMICOLON: ";",
    Delimiter.AUTO: ",",
}


def detect_delimiter(sample: str) -> Delimiter:
    """
    Guess the delimiter of a CSV sample.

    Counts commas, tabs and semicolons over the first lines of the sample; the
    most frequent wins. Ties resolve in the order comma, tab, semicolon, so a
    sample with no separators at all is treated as comma-delimited.

    Args:
        sample: Head of the file

    Returns:
        Detected Delimiter (never AUTO)

    Example:
        >>> detect_delimiter("id;name;estimate\\n1;Login;3\\n")
        <Delimiter.SEMICOLON: 'semicolon'>
    """
    lines = sample.split("\n")[: ingestion_config.DELIMITER_SAMPLE_LINES]
    best = Delimiter.COMMA
    best_count = -1

    for candidate in (Delimiter.COMMA, Delimiter.TAB, Delimiter.SEMICOLON):
        count = sum(line.count(candidate.char) for line in lines)
        if count > best_count:
            best = candidate
            best_count = count

    return best


def parse_bool(value: str) -> bool:
    """Only 'TRUE' (any case) is true; everything else, including blanks, is false."""
    return value.strip().upper() == "TRUE"


def parse_estimate(value: str) -> float:
    """Story points; blank, unparseable, non-finite or negative values become 0."""
    if not value:
        return 0.0
    try:
        estimate = float(value)
    except ValueError:
        return 0.0
    if not math.isfinite(estimate) or estimate < 0:
        return 0.0
    return estimate


def parse_string_list(value: str) -> tuple[str, ...]:
    """Comma-separated list, entries trimmed, empties dropped."""
    return tuple(part.strip() for part in value.split(",") if part.strip())


def parse_owners(value: str) -> tuple[str, ...]:
    """
    Split an owners cell.

    The first separator present, checked in the order comma, semicolon, space,
    is used to split; a cell without any separator is a single owner.

    Example:
        >>> parse_owners("alice; bob")
        ('alice', 'bob')
    """
    if not value:
        return ()
    for separator in (",", ";", " "):
        if separator in value:
            return tuple(owner.strip() for owner in value.split(separator) if owner.strip())
    return (value,)


def parse_optional_timestamp(value: str) -> datetime | None:
    """Timestamp cell to datetime; blank or unparseable cells become None."""
    try:
        return parse_board_timestamp(value)
    except ValueError:
        return None


class CSVBoardLoader:
    """
    Loads WorkItem records from a board export.

    Attributes:
        path: CSV file path
        delimiter: Delimiter to use, or AUTO to detect it from the file head

    Example:
        loader = CSVBoardLoader(Path("data/board.csv"))
        items = loader.load()
    """

    def __init__(self, path: str | Path, delimiter: Delimiter | str = Delimiter.AUTO):
        self.path = Path(path)
        self.delimiter = Delimiter.parse(delimiter)

    def load(self) -> list[WorkItem]:
        """
        Read the export into work items.

        Returns:
            Work items in file order; rows missing an id or name are skipped

        Raises:
            FileNotFoundError: If the file doesn't exist
            IsADirectoryError: If the path is a directory
            ValueError: If the file is empty, malformed or lacks required columns
        """
        self._validate_path()

        delimiter = self.delimiter
        if delimiter == Delimiter.AUTO:
            delimiter = detect_delimiter(self._read_sample())
            logger.info(f"Detected {delimiter}-delimited CSV", extra={"path": str(self.path)})

        df = self._read_frame(delimiter)
        self._validate_required_columns(df)

        items: list[WorkItem] = []
        for index, row in enumerate(df.to_dict("records")):
            row_number = index + 2  # header is line 1
            try:
                items.append(self._parse_row(row))
            except (ValueError, TypeError) as e:
                log_and_continue(logger, e, {"row": row_number, "path": str(self.path)}, "Row parsing")

        logger.info(
            f"Loaded {len(items)} work items",
            extra={"path": str(self.path), "rows": len(df), "skipped": len(df) - len(items)},
        )
        return items

    def _validate_path(self) -> None:
        if not self.path.exists():
            raise FileNotFoundError(f"CSV file '{self.path}' does not exist")
        if self.path.is_dir():
            raise IsADirectoryError(f"'{self.path}' is a directory, not a file. Please specify a CSV file path")

    def _read_sample(self) -> str:
        with self.path.open("rb") as f:
            head = f.read(ingestion_config.DELIMITER_SAMPLE_BYTES)
        return head.decode("utf-8", errors="replace")

    def _read_frame(self, delimiter: Delimiter) -> pd.DataFrame:
        try:
            df = pd.read_csv(
                self.path,
                sep=delimiter.char,
                dtype=str,
                keep_default_na=False,
                engine="python",
                on_bad_lines=self._on_bad_line,
                encoding="utf-8-sig",
            )
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise ValueError(f"error reading CSV file '{self.path}': {e}") from e

        df.columns = [str(col).strip() for col in df.columns]
        return df.fillna("")

    def _on_bad_line(self, bad_line: list[str]) -> None:
        log_and_continue(
            logger,
            ValueError(f"unexpected field count ({len(bad_line)})"),
            {"path": str(self.path), "first_field": bad_line[0] if bad_line else ""},
            "Row parsing",
        )
        return None

    def _validate_required_columns(self, df: pd.DataFrame) -> None:
        missing = [col for col in ingestion_config.REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(
                f"required column '{missing[0]}' not found in CSV headers\n" f"Available columns: {list(df.columns)}"
            )

    def _parse_row(self, row: dict[str, Any]) -> WorkItem:
        def cell(name: str) -> str:
            return str(row.get(name, "")).strip()

        item_id = cell("id")
        name = cell("name")
        if not item_id:
            raise ValueError("missing required field: id")
        if not name:
            raise ValueError("missing required field: name")

        return WorkItem(
            id=item_id,
            name=name,
            type=cell("type"),
            owners=parse_owners(cell("owners")),
            estimate=parse_estimate(cell("estimate")),
            is_completed=parse_bool(cell("is_completed")),
            labels=parse_string_list(cell("labels")),
            state=cell("state"),
            created_at=parse_optional_timestamp(cell("created_at")),
            started_at=parse_optional_timestamp(cell("started_at")),
            completed_at=parse_optional_timestamp(cell("completed_at")),
            team=cell("team"),
            epic=cell("epic"),
            product_area=cell("product_area"),
        )


def load_work_items(path: str | Path, delimiter: Delimiter | str = Delimiter.AUTO) -> list[WorkItem]:
    """
    Load work items from a board export.

    Args:
        path: CSV file path
        delimiter: comma, tab, semicolon or auto

    Returns:
        Parsed work items
    """
    return CSVBoardLoader(path, delimiter).load()
