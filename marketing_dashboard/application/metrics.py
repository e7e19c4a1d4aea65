"""Metric aggregation and derived ratios."""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Sequence

import polars as pl

from marketing_dashboard.domain.models import (
    METRIC_FIELDS,
    ChannelSummary,
    MetricTotals,
    Record,
    resolve_label,
    to_non_negative_number,
)

TOP_CHANNELS_LIMIT = 8
# name -> (numerator, denominator, scale)
DERIVED_RATIOS: Dict[str, tuple[str, str, float]] = {
    "ctr": ("conversions", "impressions", 100.0),
    "click_rate": ("clicks", "impressions", 100.0),
    "cvr": ("conversions", "clicks", 100.0),
    "cpc": ("spend", "clicks", 1.0),
    "cpa": ("spend", "conversions", 1.0),
    "roas": ("revenue", "spend", 1.0),
}
RECORD_SCHEMA: Dict[str, Any] = {
    "channel": pl.Utf8,
    "region": pl.Utf8,
    "spend": pl.Float64,
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "conversions": pl.Int64,
    "revenue": pl.Float64,
}


def safe_ratio(num: float, den: float) -> float:
    if den <= 0:
        return 0.0
    return num / den


def sum_metrics(records: Iterable[Record]) -> MetricTotals:
    """Additive fold; float fields use ``math.fsum`` so the result is independent of input order."""
    rows = list(records)
    return MetricTotals(
        spend=math.fsum(record.spend for record in rows),
        impressions=sum(record.impressions for record in rows),
        clicks=sum(record.clicks for record in rows),
        conversions=sum(record.conversions for record in rows),
        revenue=math.fsum(record.revenue for record in rows),
    )


def ratio(numerator_field: str, denominator_field: str, totals: MetricTotals) -> float:
    """Plain quotient of two totals, exactly 0 when the denominator total is 0.

    Unknown field names read as 0. Percentage scaling is left to the caller.
    """
    numerator = to_non_negative_number(totals.get(numerator_field))
    denominator = to_non_negative_number(totals.get(denominator_field))
    return safe_ratio(numerator, denominator)


def derived_ratio(name: str, totals: MetricTotals) -> float:
    spec = DERIVED_RATIOS.get(name)
    if spec is None:
        return 0.0
    numerator_field, denominator_field, scale = spec
    return ratio(numerator_field, denominator_field, totals) * scale


def kpi_summary(records: Iterable[Record]) -> Dict[str, float]:
    totals = sum_metrics(records)
    summary: Dict[str, float] = dict(totals.as_dict())
    summary["ctr"] = derived_ratio("ctr", totals)
    return summary


def records_frame(records: Sequence[Record]) -> pl.DataFrame:
    columns: Dict[str, List[Any]] = {name: [] for name in RECORD_SCHEMA}
    for record in records:
        columns["channel"].append(resolve_label(record.channel))
        columns["region"].append(resolve_label(record.region))
        for name in METRIC_FIELDS:
            columns[name].append(getattr(record, name))
    return pl.DataFrame(columns, schema=RECORD_SCHEMA)


def top_channels(records: Sequence[Record], limit: int = TOP_CHANNELS_LIMIT) -> List[ChannelSummary]:
    """Spend and impressions per channel, highest spend first, capped at ``limit``."""
    if limit <= 0:
        return []
    frame = records_frame(records)
    if frame.is_empty():
        return []

    ranked = (
        frame.group_by("channel", maintain_order=True)
        .agg(
            pl.col("spend").sum().alias("spend"),
            pl.col("impressions").sum().alias("impressions"),
        )
        .sort("spend", descending=True, maintain_order=True)
        .head(limit)
    )
    return [
        ChannelSummary(channel=row["channel"], spend=float(row["spend"]), impressions=int(row["impressions"]))
        for row in ranked.iter_rows(named=True)
    ]
