"""Filter engine for flat record collections."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Sequence

from marketing_dashboard.domain.models import FilterCriteria, Record, resolve_label


def coerce_criteria(criteria: FilterCriteria | Mapping[str, Any] | None) -> FilterCriteria:
    if isinstance(criteria, FilterCriteria):
        return FilterCriteria.from_mapping(
            {"channel": criteria.channel, "region": criteria.region, "query": criteria.query}
        )
    if isinstance(criteria, Mapping):
        return FilterCriteria.from_mapping(criteria)
    return FilterCriteria()


def _matches(record: Record, channel: str, region: str, query: str) -> bool:
    record_channel = resolve_label(record.channel)
    record_region = resolve_label(record.region)
    if channel and record_channel != channel:
        return False
    if region and record_region != region:
        return False
    if query and not (query in record_channel.lower() or query in record_region.lower()):
        return False
    return True


def filter_records(
    records: Iterable[Record],
    criteria: FilterCriteria | Mapping[str, Any] | None = None,
) -> List[Record]:
    """Return the records passing every set constraint, in input order."""
    resolved = coerce_criteria(criteria)
    query = resolved.query.strip().lower()
    return [record for record in records if _matches(record, resolved.channel, resolved.region, query)]


def filter_options(records: Iterable[Record]) -> Dict[str, List[str]]:
    channels: set[str] = set()
    regions: set[str] = set()
    for record in records:
        channels.add(resolve_label(record.channel))
        regions.add(resolve_label(record.region))
    return {"channels": sorted(channels), "regions": sorted(regions)}


def filter_summary(records: Sequence[Record]) -> str:
    return f"{len(records)} rows"
