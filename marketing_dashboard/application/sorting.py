"""Stable sorting over records and summary rows."""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import Any, Iterable, List, TypeVar

from marketing_dashboard.domain.models import SortDirection, SortField, SortSpec

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_sort_field(field: SortField | str | None) -> SortField | None:
    if isinstance(field, SortField):
        return field
    if not isinstance(field, str):
        return None
    try:
        return SortField(field.strip().lower())
    except ValueError:
        return None


def resolve_direction(direction: SortDirection | str | None) -> SortDirection:
    if isinstance(direction, SortDirection):
        return direction
    if isinstance(direction, str) and direction.strip().lower() == SortDirection.ASC.value:
        return SortDirection.ASC
    return SortDirection.DESC


def sort_records(
    items: Iterable[T],
    field: SortField | str | None = SortField.SPEND,
    direction: SortDirection | str | None = SortDirection.DESC,
) -> List[T]:
    """Return a new list ordered by ``field``; equal values keep their input order.

    An unknown field, an item lacking the field, or values of mutually
    incomparable types leave the result in input order.
    """
    ordered = list(items)
    sort_field = resolve_sort_field(field)
    if sort_field is None:
        logger.debug("Unknown sort field %r; keeping input order", field)
        return ordered

    accessor = attrgetter(sort_field.value)
    try:
        keys: List[Any] = [accessor(item) for item in ordered]
    except AttributeError:
        logger.debug("Items do not expose %r; keeping input order", sort_field.value)
        return ordered

    reverse = resolve_direction(direction) is SortDirection.DESC
    indexes = range(len(ordered))
    try:
        ranked = sorted(indexes, key=keys.__getitem__, reverse=reverse)
    except TypeError:
        logger.debug("Values of %r are not mutually comparable; keeping input order", sort_field.value)
        return ordered
    return [ordered[idx] for idx in ranked]


def sort_by_spec(items: Iterable[T], spec: SortSpec) -> List[T]:
    return sort_records(items, spec.field, spec.direction)


def toggle_sort(spec: SortSpec, field: SortField | str) -> SortSpec:
    """Same field flips direction; a new field starts descending."""
    sort_field = resolve_sort_field(field)
    if sort_field is None:
        return spec
    if sort_field is spec.field:
        return SortSpec(field=spec.field, direction=spec.direction.flipped())
    return SortSpec(field=sort_field, direction=SortDirection.DESC)
