"""Region -> channel rollup tree.

The builder is stateless: every call rebuilds the whole tree from its input.
Expansion state for presentation belongs to the caller and is passed in as
plain frozensets of region and channel names.

Regions or channels sharing a literal name merge into a single node; the
source data carries no identifier to tell them apart.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List

from marketing_dashboard.application.metrics import sum_metrics
from marketing_dashboard.domain.models import (
    PLACEHOLDER_SUBCATEGORIES,
    ChannelNode,
    MetricTotals,
    Record,
    resolve_label,
)

Tree = Dict[str, Dict[str, ChannelNode]]


@dataclass(frozen=True)
class TreeRow:
    kind: str
    depth: int
    label: str
    region: str
    channel: str | None = None
    totals: MetricTotals | None = None
    expanded: bool | None = None


def build_tree(records: Iterable[Record]) -> Tree:
    grouped: Dict[str, Dict[str, List[Record]]] = {}
    for record in records:
        region = resolve_label(record.region)
        channel = resolve_label(record.channel)
        channels = grouped.setdefault(region, {})
        channels.setdefault(channel, []).append(record)

    return {
        region: {
            channel: ChannelNode(channel=channel, totals=sum_metrics(rows), subcategories=PLACEHOLDER_SUBCATEGORIES)
            for channel, rows in channels.items()
        }
        for region, channels in grouped.items()
    }


def region_totals(tree: Tree) -> Dict[str, MetricTotals]:
    output: Dict[str, MetricTotals] = {}
    for region, channels in tree.items():
        nodes = [node.totals for node in channels.values()]
        output[region] = MetricTotals(
            spend=math.fsum(item.spend for item in nodes),
            impressions=sum(item.impressions for item in nodes),
            clicks=sum(item.clicks for item in nodes),
            conversions=sum(item.conversions for item in nodes),
            revenue=math.fsum(item.revenue for item in nodes),
        )
    return output


def toggle(expanded: AbstractSet[str], key: str) -> frozenset[str]:
    if key in expanded:
        return frozenset(expanded - {key})
    return frozenset(expanded | {key})


def visible_rows(
    tree: Tree,
    expanded_regions: AbstractSet[str] = frozenset(),
    expanded_channels: AbstractSet[str] = frozenset(),
) -> List[TreeRow]:
    """Flatten the tree into display rows honoring the caller's expansion state.

    Channel expansion is keyed by channel name alone, so expanding a channel
    opens it under every expanded region.
    """
    rows: List[TreeRow] = []
    for region, channels in tree.items():
        region_open = region in expanded_regions
        rows.append(TreeRow(kind="region", depth=0, label=region, region=region, expanded=region_open))
        if not region_open:
            continue
        for channel, node in channels.items():
            channel_open = channel in expanded_channels
            rows.append(
                TreeRow(
                    kind="channel",
                    depth=1,
                    label=channel,
                    region=region,
                    channel=channel,
                    totals=node.totals,
                    expanded=channel_open,
                )
            )
            if not channel_open:
                continue
            for label in node.subcategories:
                rows.append(TreeRow(kind="subcategory", depth=2, label=label, region=region, channel=channel))
    return rows
