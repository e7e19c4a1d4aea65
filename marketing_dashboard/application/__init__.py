"""Application layer package."""

from .dashboard_service import DashboardRunResult, build_dashboard_summary, run_dashboard
from .export import to_delimited_text
from .filters import filter_records
from .hierarchy import build_tree
from .metrics import ratio, sum_metrics
from .pipeline import DashboardPipeline, DashboardView, PipelineState, PipelineStateError
from .sorting import sort_records

__all__ = [
    "DashboardPipeline",
    "DashboardRunResult",
    "DashboardView",
    "PipelineState",
    "PipelineStateError",
    "build_dashboard_summary",
    "build_tree",
    "filter_records",
    "ratio",
    "run_dashboard",
    "sort_records",
    "sum_metrics",
    "to_delimited_text",
]
