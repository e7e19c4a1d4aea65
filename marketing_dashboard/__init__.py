"""Marketing dashboard rollup package."""

from .application import (
    DashboardPipeline,
    build_tree,
    filter_records,
    ratio,
    run_dashboard,
    sort_records,
    sum_metrics,
    to_delimited_text,
)
from .config import DashboardSettings, load_settings
from .domain import FilterCriteria, MetricTotals, Record, SortDirection, SortField, SortSpec
from .ingestion import read_input_records

__all__ = [
    "DashboardPipeline",
    "DashboardSettings",
    "FilterCriteria",
    "MetricTotals",
    "Record",
    "SortDirection",
    "SortField",
    "SortSpec",
    "build_tree",
    "filter_records",
    "load_settings",
    "ratio",
    "read_input_records",
    "run_dashboard",
    "sort_records",
    "sum_metrics",
    "to_delimited_text",
]
