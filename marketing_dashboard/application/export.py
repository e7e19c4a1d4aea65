"""Delimited-text export of filtered record collections."""

from __future__ import annotations

import json
import math
from typing import Any, Iterable, List, Mapping

import polars as pl

from marketing_dashboard.domain.models import Record

DELIMITER = ","
LINE_TERMINATOR = "\n"


def _cell_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    # Empty strings and nulls both render as an empty field.
    return str(value) or None


def _row_dict(item: Record | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(item, Record):
        return item.to_dict()
    return dict(item)


def to_delimited_text(records: Iterable[Record | Mapping[str, Any]]) -> str | None:
    """Serialize records to comma-delimited text, or ``None`` when there is nothing to export.

    The header is the first record's key order. Values containing the
    delimiter, a quote or a newline are quoted with embedded quotes doubled.
    Rows are joined by a single newline without a trailing one.
    """
    rows: List[dict[str, Any]] = [_row_dict(item) for item in records]
    if not rows:
        return None

    # Keys that stringify to the same column name keep the first one.
    columns: dict[str, Any] = {}
    for key in rows[0].keys():
        columns.setdefault(str(key), key)
    if not columns:
        return ""
    header = list(columns)
    keys = list(columns.values())
    frame = pl.DataFrame(
        [[_cell_text(row.get(key)) for key in keys] for row in rows],
        schema={name: pl.Utf8 for name in header},
        orient="row",
    )
    text = frame.write_csv(
        separator=DELIMITER,
        line_terminator=LINE_TERMINATOR,
        quote_style="necessary",
    )
    if text.endswith(LINE_TERMINATOR):
        text = text[: -len(LINE_TERMINATOR)]
    return text
