"""Domain models for marketing performance rollups."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

UNKNOWN_LABEL = "Unknown"
METRIC_FIELDS: tuple[str, ...] = ("spend", "impressions", "clicks", "conversions", "revenue")
RECORD_FIELDS: tuple[str, ...] = ("id", "channel", "region", "spend", "impressions", "clicks", "conversions", "revenue")
# Reserved for a future breakdown; no data source feeds them yet.
PLACEHOLDER_SUBCATEGORIES: tuple[str, ...] = ("Direct", "Seasonality", "Holidays", "Trends")


def to_non_negative_number(value: Any) -> float:
    """Coerce any input to a finite, non-negative float; everything else becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def to_non_negative_int(value: Any) -> int:
    return int(to_non_negative_number(value))


def resolve_label(value: Any) -> str:
    if value is None:
        return UNKNOWN_LABEL
    text = str(value).strip()
    return text or UNKNOWN_LABEL


@dataclass(frozen=True)
class MetricTotals:
    """Additive metric sums over a record subset."""

    spend: float = 0.0
    impressions: int = 0
    clicks: int = 0
    conversions: int = 0
    revenue: float = 0.0

    def __add__(self, other: "MetricTotals") -> "MetricTotals":
        if not isinstance(other, MetricTotals):
            return NotImplemented
        return MetricTotals(
            spend=self.spend + other.spend,
            impressions=self.impressions + other.impressions,
            clicks=self.clicks + other.clicks,
            conversions=self.conversions + other.conversions,
            revenue=self.revenue + other.revenue,
        )

    def get(self, name: str) -> float:
        if name not in METRIC_FIELDS:
            return 0.0
        return getattr(self, name)

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in METRIC_FIELDS}


@dataclass(frozen=True)
class Record:
    """One flat row of marketing performance data."""

    id: Any
    channel: str
    region: str
    spend: float = 0.0
    impressions: int = 0
    clicks: int = 0
    conversions: int = 0
    revenue: float = 0.0
    extras: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Record":
        extras = {key: value for key, value in row.items() if key not in RECORD_FIELDS}
        return cls(
            id=row.get("id"),
            channel=resolve_label(row.get("channel")),
            region=resolve_label(row.get("region")),
            spend=to_non_negative_number(row.get("spend")),
            impressions=to_non_negative_int(row.get("impressions")),
            clicks=to_non_negative_int(row.get("clicks")),
            conversions=to_non_negative_int(row.get("conversions")),
            revenue=to_non_negative_number(row.get("revenue")),
            extras=extras,
        )

    @property
    def totals(self) -> MetricTotals:
        return MetricTotals(
            spend=self.spend,
            impressions=self.impressions,
            clicks=self.clicks,
            conversions=self.conversions,
            revenue=self.revenue,
        )

    def to_dict(self) -> dict[str, Any]:
        data = {name: getattr(self, name) for name in RECORD_FIELDS}
        data.update(self.extras)
        return data


@dataclass(frozen=True)
class ChannelSummary:
    channel: str
    spend: float
    impressions: int


@dataclass(frozen=True)
class ChannelNode:
    """Channel level of the region -> channel rollup tree."""

    channel: str
    totals: MetricTotals
    subcategories: tuple[str, ...] = PLACEHOLDER_SUBCATEGORIES


@dataclass(frozen=True)
class FilterCriteria:
    """Equality and free-text constraints; an empty string means no constraint."""

    channel: str = ""
    region: str = ""
    query: str = ""

    @staticmethod
    def _clean(value: Any) -> str:
        return value if isinstance(value, str) else ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FilterCriteria":
        if not data:
            return cls()
        query = data.get("query")
        if query is None:
            query = data.get("q")
        return cls(
            channel=cls._clean(data.get("channel")),
            region=cls._clean(data.get("region")),
            query=cls._clean(query),
        )

    @property
    def is_identity(self) -> bool:
        return not (self.channel or self.region or self.query.strip())


class SortField(str, Enum):
    ID = "id"
    CHANNEL = "channel"
    REGION = "region"
    SPEND = "spend"
    IMPRESSIONS = "impressions"
    CLICKS = "clicks"
    CONVERSIONS = "conversions"
    REVENUE = "revenue"

    @property
    def is_numeric(self) -> bool:
        return self.value in METRIC_FIELDS


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.ASC if self is SortDirection.DESC else SortDirection.DESC


@dataclass(frozen=True)
class SortSpec:
    field: SortField = SortField.SPEND
    direction: SortDirection = SortDirection.DESC
