"""Board snapshot ingestion."""

from .csv_loader import CSVBoardLoader, Delimiter, detect_delimiter, load_work_items

__all__ = ["CSVBoardLoader", "Delimiter", "detect_delimiter", "load_work_items"]
