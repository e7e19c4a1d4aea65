"""Domain layer package."""

from .models import (
    PLACEHOLDER_SUBCATEGORIES,
    ChannelNode,
    ChannelSummary,
    FilterCriteria,
    MetricTotals,
    Record,
    SortDirection,
    SortField,
    SortSpec,
    to_non_negative_number,
)

__all__ = [
    "PLACEHOLDER_SUBCATEGORIES",
    "ChannelNode",
    "ChannelSummary",
    "FilterCriteria",
    "MetricTotals",
    "Record",
    "SortDirection",
    "SortField",
    "SortSpec",
    "to_non_negative_number",
]
