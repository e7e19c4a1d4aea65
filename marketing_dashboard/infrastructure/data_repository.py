"""Infrastructure adapter for file-based dataset loading and export saving."""

from __future__ import annotations

import logging
from pathlib import Path

import polars as pl

from marketing_dashboard.config import DEFAULT_PARSE_ERROR_THRESHOLD
from marketing_dashboard.domain.models import Record
from marketing_dashboard.ingestion import read_input_records

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Dataset could not be loaded. Ensure {path} exists and is valid {kind}."


class DataLoadError(RuntimeError):
    def __init__(self, path: Path, cause: Exception) -> None:
        kind = path.suffix.lstrip(".").upper() or "data"
        super().__init__(LOAD_ERROR_MESSAGE.format(path=path, kind=kind))
        self.path = path
        self.cause = cause


def load_records(path: str | Path, parse_error_threshold: float = DEFAULT_PARSE_ERROR_THRESHOLD) -> list[Record]:
    data_path = Path(path)
    try:
        records = read_input_records(data_path, parse_error_threshold=parse_error_threshold)
    except (OSError, ValueError, RuntimeError, pl.exceptions.PolarsError) as exc:
        logger.error("Failed to load dataset %s: %s", data_path, exc)
        raise DataLoadError(data_path, exc) from exc
    logger.info("Loaded %d records from %s", len(records), data_path)
    return records


def save_export(path: Path, text: str | None) -> tuple[bool, str]:
    """Write export text as UTF-8; a locked target is reported, not raised."""
    if text is None:
        return False, "nothing to export"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except PermissionError as exc:
        return False, str(exc)
    return True, ""
