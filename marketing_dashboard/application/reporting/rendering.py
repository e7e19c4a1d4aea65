"""Display formatting for KPI cards, the record table and the rollup tree."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from marketing_dashboard.application.hierarchy import TreeRow
from marketing_dashboard.application.metrics import derived_ratio
from marketing_dashboard.config import DEFAULT_CURRENCY_SYMBOL
from marketing_dashboard.domain.models import Record, to_non_negative_number

EMPTY_CELL = "-"


def format_money(value: Any, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    return f"{symbol}{to_non_negative_number(value):.2f}"


def format_count(value: Any) -> str:
    number = to_non_negative_number(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.2f}"


def format_pct(value: float | None) -> str:
    if value is None:
        return "0.00%"
    return f"{value:.2f}%"


def kpi_cards(kpis: Dict[str, float], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> List[Dict[str, str]]:
    return [
        {"label": "Total Spend", "value": format_money(kpis.get("spend"), symbol)},
        {"label": "Impressions", "value": format_count(kpis.get("impressions"))},
        {"label": "Clicks", "value": format_count(kpis.get("clicks"))},
        {"label": "Conversions", "value": format_count(kpis.get("conversions"))},
        {"label": "CTR", "value": format_pct(kpis.get("ctr"))},
    ]


def table_rows(records: Sequence[Record], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for idx, record in enumerate(records, start=1):
        rows.append(
            {
                "rank": idx,
                "id": record.id,
                "channel": record.channel,
                "region": record.region,
                "spend": format_money(record.spend, symbol),
                "impressions": format_count(record.impressions),
                "conversions": record.conversions,
                "clicks": record.clicks,
                "ctr": format_pct(derived_ratio("ctr", record.totals)),
            }
        )
    return rows


def tree_table_rows(rows: Sequence[TreeRow], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> List[Dict[str, Any]]:
    output: List[Dict[str, Any]] = []
    for row in rows:
        marker = ""
        if row.expanded is not None:
            marker = "▼ " if row.expanded else "▶ "
        item: Dict[str, Any] = {"depth": row.depth, "kind": row.kind, "label": f"{marker}{row.label}"}
        if row.totals is None:
            item.update(
                {
                    "spend": EMPTY_CELL,
                    "revenue": EMPTY_CELL,
                    "impressions": EMPTY_CELL,
                    "conversions": EMPTY_CELL,
                    "clicks": EMPTY_CELL,
                }
            )
        else:
            item.update(
                {
                    "spend": format_money(row.totals.spend, symbol),
                    "revenue": format_money(row.totals.revenue, symbol),
                    "impressions": format_count(row.totals.impressions),
                    "conversions": row.totals.conversions,
                    "clicks": row.totals.clicks,
                }
            )
        output.append(item)
    return output
