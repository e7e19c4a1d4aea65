"""Application service for the dashboard summary use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import AbstractSet, Any, Dict, List

from marketing_dashboard.application.filters import filter_options, filter_summary
from marketing_dashboard.application.hierarchy import region_totals, visible_rows
from marketing_dashboard.application.metrics import derived_ratio, kpi_summary, top_channels
from marketing_dashboard.application.pipeline import DashboardPipeline, DashboardView
from marketing_dashboard.application.reporting.rendering import kpi_cards, table_rows, tree_table_rows
from marketing_dashboard.config import DashboardSettings
from marketing_dashboard.domain.models import FilterCriteria, SortSpec
from marketing_dashboard.infrastructure.data_repository import load_records, save_export
from marketing_dashboard.infrastructure.report_exporter import save_summary_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardRunResult:
    summary: Dict[str, Any]
    export_saved: bool
    export_message: str
    stage_timings: List[tuple[str, float]]


def _tree_summary(view: DashboardView) -> List[Dict[str, Any]]:
    totals_by_region = region_totals(view.tree)
    regions: List[Dict[str, Any]] = []
    for region, channels in view.tree.items():
        regions.append(
            {
                "region": region,
                "totals": totals_by_region[region].as_dict(),
                "channels": [
                    {
                        "channel": channel,
                        "totals": node.totals.as_dict(),
                        "ctr": derived_ratio("ctr", node.totals),
                        "subcategories": list(node.subcategories),
                    }
                    for channel, node in channels.items()
                ],
            }
        )
    return regions


def build_dashboard_summary(
    view: DashboardView,
    settings: DashboardSettings,
    expanded_regions: AbstractSet[str] = frozenset(),
    expanded_channels: AbstractSet[str] = frozenset(),
) -> Dict[str, Any]:
    symbol = settings.currency_symbol
    kpis = kpi_summary(view.filtered)
    return {
        "state": view.state.value,
        "criteria": {
            "channel": view.criteria.channel,
            "region": view.criteria.region,
            "query": view.criteria.query,
        },
        "sort": {"field": view.sort.field.value, "direction": view.sort.direction.value},
        "row_count": len(view.filtered),
        "row_count_label": filter_summary(view.filtered),
        "filter_options": filter_options(view.records),
        "kpis": kpis,
        "kpi_cards": kpi_cards(kpis, symbol),
        "top_channels": [
            {"channel": item.channel, "spend": item.spend, "impressions": item.impressions}
            for item in top_channels(view.filtered, limit=settings.top_channels)
        ],
        "tree": _tree_summary(view),
        "tree_rows": tree_table_rows(
            visible_rows(view.tree, expanded_regions, expanded_channels),
            symbol,
        ),
        "table": table_rows(view.sorted_records, symbol),
    }


def run_dashboard(
    settings: DashboardSettings,
    criteria: FilterCriteria | None = None,
    sort: SortSpec | None = None,
    export: bool = True,
) -> DashboardRunResult:
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    records = load_records(settings.data_path, parse_error_threshold=settings.parse_error_threshold)
    _mark("load_records")

    pipeline = DashboardPipeline()
    pipeline.load(records)
    if criteria is not None:
        pipeline.apply_criteria(criteria)
    if sort is not None:
        pipeline.apply_sort(sort)
    _mark("apply_selection")

    view = pipeline.view
    expanded = frozenset(view.tree.keys())
    summary = build_dashboard_summary(view, settings, expanded_regions=expanded)
    save_summary_json(settings.summary_path, summary)
    _mark("build_summary")

    export_saved = False
    export_message = "export disabled"
    if export:
        export_saved, export_message = save_export(settings.export_path, pipeline.export_text())
        _mark("save_export")

    logger.info(
        "Dashboard prepared: rows=%d, regions=%d, elapsed=%.3fs",
        len(view.filtered),
        len(view.tree),
        perf_counter() - pipeline_start,
    )
    return DashboardRunResult(
        summary=summary,
        export_saved=export_saved,
        export_message=export_message,
        stage_timings=stage_timings,
    )
