"""Dataset ingestion helpers with Polars-first and openpyxl fallback."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

import polars as pl

from marketing_dashboard.config import DEFAULT_PARSE_ERROR_THRESHOLD
from marketing_dashboard.domain.models import METRIC_FIELDS, UNKNOWN_LABEL, Record

DIMENSIONS: list[str] = ["channel", "region"]
SUPPORTED_SUFFIXES: tuple[str, ...] = (".json", ".csv", ".xlsx")
PREFERRED_SHEET = "data"


def _import_openpyxl() -> Any:
    try:
        from openpyxl import load_workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required for Excel fallback I/O.") from exc
    return load_workbook


def _header_names(raw_headers: Sequence[Any]) -> list[str]:
    names: list[str] = []
    for idx, value in enumerate(raw_headers, start=1):
        name = str(value).strip() if value not in (None, "") else f"column_{idx}"
        while name in names:
            name = f"{name}_dup"
        names.append(name)
    return names


def _parsed_metric(column_name: str) -> pl.Expr:
    text = pl.col(column_name).cast(pl.Utf8, strict=False).str.strip_chars()
    return text.str.replace_all(",", "").cast(pl.Float64, strict=False)


def _unparsed_count(column_name: str) -> pl.Expr:
    text = pl.col(column_name).cast(pl.Utf8, strict=False).str.strip_chars()
    unparsed = text.is_not_null() & (text != "") & _parsed_metric(column_name).is_null()
    return unparsed.sum().alias(column_name)


def validate_metric_parse_errors(
    df: pl.DataFrame,
    context: str,
    threshold: float = DEFAULT_PARSE_ERROR_THRESHOLD,
) -> None:
    """Raise when the share of unparseable metric cells exceeds ``threshold``.

    Individual bad cells are tolerated and later read as zero.
    """
    metrics = [column for column in METRIC_FIELDS if column in df.columns]
    if df.is_empty() or threshold <= 0 or not metrics:
        return

    row_count = int(df.height)
    counts = df.select([_unparsed_count(column) for column in metrics]).row(0, named=True)
    failures = [
        f"{column}={int(count or 0) / row_count:.2%} ({int(count or 0)}/{row_count})"
        for column, count in counts.items()
        if int(count or 0) / row_count > threshold
    ]
    if failures:
        raise ValueError(
            f"Data quality check failed in {context}: metric parse error ratio exceeds {threshold:.2%} "
            f"({', '.join(failures)})"
        )


def normalize_frame(df: pl.DataFrame) -> pl.DataFrame:
    """Strip dimensions (null -> Unknown) and parse metric text to floats (unparseable -> 0)."""
    exprs = [
        pl.col(dim).cast(pl.Utf8, strict=False).str.strip_chars().fill_null(UNKNOWN_LABEL).alias(dim)
        for dim in DIMENSIONS
        if dim in df.columns
    ]
    exprs += [_parsed_metric(metric).fill_null(0.0).alias(metric) for metric in METRIC_FIELDS if metric in df.columns]
    if not exprs:
        return df
    return df.with_columns(exprs)


def _metric_text_frame(rows: Sequence[Dict[str, Any]]) -> pl.DataFrame:
    columns: Dict[str, List[str | None]] = {}
    for metric in METRIC_FIELDS:
        if not any(metric in row for row in rows):
            continue
        columns[metric] = [None if row.get(metric) is None else str(row.get(metric)) for row in rows]
    return pl.DataFrame(columns, schema={name: pl.Utf8 for name in columns})


def _read_json_rows(path: Path) -> list[Dict[str, Any]]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        return []
    return [row for row in payload if isinstance(row, dict)]


def _read_excel_with_polars(path: Path) -> pl.DataFrame:
    try:
        frame = pl.read_excel(path, sheet_name=PREFERRED_SHEET)
    except Exception:
        frame = pl.read_excel(path)
    if isinstance(frame, dict):
        first_key = next(iter(frame.keys()), None)
        return frame[first_key] if first_key is not None else pl.DataFrame()
    return frame


def _read_excel_with_openpyxl(path: Path) -> pl.DataFrame:
    load_workbook = _import_openpyxl()
    workbook = load_workbook(path, read_only=True, data_only=True)
    sheet_name = PREFERRED_SHEET if PREFERRED_SHEET in workbook.sheetnames else workbook.sheetnames[0]
    worksheet = workbook[sheet_name]
    row_iter = worksheet.iter_rows(values_only=True)
    header_row = next(row_iter, None)
    if header_row is None:
        workbook.close()
        return pl.DataFrame()

    headers = _header_names(header_row)
    columns: Dict[str, List[str | None]] = {name: [] for name in headers}
    for values in row_iter:
        if values is None or all(value is None for value in values):
            continue
        for idx, name in enumerate(headers):
            value = values[idx] if idx < len(values) else None
            columns[name].append(None if value is None else str(value))

    workbook.close()
    return pl.DataFrame(columns, schema={name: pl.Utf8 for name in headers})


def read_input_frame(path: Path) -> pl.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pl.read_csv(path, infer_schema_length=0)
    if suffix == ".xlsx":
        try:
            return _read_excel_with_polars(path)
        except Exception:
            return _read_excel_with_openpyxl(path)
    raise ValueError(f"Unsupported dataset format: {path.suffix or path.name}")


def read_input_records(
    path: str | Path,
    parse_error_threshold: float = DEFAULT_PARSE_ERROR_THRESHOLD,
) -> list[Record]:
    """Read a dataset file into coerced records in source order."""
    data_path = Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f"Dataset file not found: {data_path}")
    suffix = data_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported dataset format: {data_path.suffix or data_path.name}")

    if suffix == ".json":
        rows = _read_json_rows(data_path)
        validate_metric_parse_errors(_metric_text_frame(rows), context=data_path.name, threshold=parse_error_threshold)
        return [Record.from_row(row) for row in rows]

    raw_df = read_input_frame(data_path)
    validate_metric_parse_errors(raw_df, context=data_path.name, threshold=parse_error_threshold)
    return [Record.from_row(row) for row in normalize_frame(raw_df).iter_rows(named=True)]
