"""Pipeline coordinator: sequences filter, sort, rollup and export."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Tuple

from marketing_dashboard.application.export import to_delimited_text
from marketing_dashboard.application.filters import coerce_criteria, filter_records
from marketing_dashboard.application.hierarchy import Tree, build_tree
from marketing_dashboard.application.metrics import sum_metrics
from marketing_dashboard.application.sorting import resolve_direction, resolve_sort_field, sort_by_spec
from marketing_dashboard.domain.models import FilterCriteria, MetricTotals, Record, SortDirection, SortField, SortSpec

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    LOADED = "loaded"
    FILTERED = "filtered"


class PipelineStateError(RuntimeError):
    pass


@dataclass(frozen=True)
class DashboardView:
    """Immutable snapshot of everything derived from the current selections."""

    state: PipelineState
    records: Tuple[Record, ...] = ()
    filtered: Tuple[Record, ...] = ()
    sorted_records: Tuple[Record, ...] = ()
    tree: Tree = field(default_factory=dict)
    totals: MetricTotals = field(default_factory=MetricTotals)
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec = field(default_factory=SortSpec)


def coerce_records(records: Iterable[Record | Mapping[str, Any]]) -> Tuple[Record, ...]:
    return tuple(item if isinstance(item, Record) else Record.from_row(item) for item in records)


class DashboardPipeline:
    """Three-state coordinator: IDLE -> LOADED -> FILTERED.

    Owns no business logic; each transition re-runs the pure stages it
    invalidates and publishes a new :class:`DashboardView`.
    """

    def __init__(self) -> None:
        self._view = DashboardView(state=PipelineState.IDLE)

    @property
    def view(self) -> DashboardView:
        return self._view

    @property
    def state(self) -> PipelineState:
        return self._view.state

    def load(
        self,
        records: Iterable[Record | Mapping[str, Any]],
        keep_selection: bool = False,
    ) -> DashboardView:
        """Replace the record set.

        By default the identity filter and default sort are applied. With
        ``keep_selection`` the current criteria and sort are re-applied to the
        new records instead.
        """
        loaded = coerce_records(records)
        criteria = self._view.criteria if keep_selection else FilterCriteria()
        sort = self._view.sort if keep_selection else SortSpec()
        state = PipelineState.FILTERED if keep_selection and not criteria.is_identity else PipelineState.LOADED
        self._view = self._derive(state, loaded, criteria, sort)
        logger.debug("Loaded %d records (state=%s)", len(loaded), state.value)
        return self._view

    def apply_criteria(self, criteria: FilterCriteria | Mapping[str, Any] | None) -> DashboardView:
        self._require_records("apply_criteria")
        resolved = coerce_criteria(criteria)
        self._view = self._derive(PipelineState.FILTERED, self._view.records, resolved, self._view.sort)
        logger.debug("Applied criteria %s: %d rows", resolved, len(self._view.filtered))
        return self._view

    def apply_sort(
        self,
        spec: SortSpec | SortField | str,
        direction: SortDirection | str | None = None,
    ) -> DashboardView:
        """Re-order the current filtered set without re-filtering.

        An unknown field name keeps the current sort.
        """
        self._require_records("apply_sort")
        if isinstance(spec, SortSpec):
            resolved = spec
        else:
            sort_field = resolve_sort_field(spec)
            if sort_field is None:
                logger.debug("Ignoring unknown sort field %r", spec)
                return self._view
            resolved = SortSpec(field=sort_field, direction=resolve_direction(direction))

        current = self._view
        self._view = DashboardView(
            state=current.state,
            records=current.records,
            filtered=current.filtered,
            sorted_records=tuple(sort_by_spec(current.filtered, resolved)),
            tree=current.tree,
            totals=current.totals,
            criteria=current.criteria,
            sort=resolved,
        )
        return self._view

    def export_text(self) -> str | None:
        return to_delimited_text(self._view.sorted_records)

    def _require_records(self, operation: str) -> None:
        if self._view.state is PipelineState.IDLE:
            raise PipelineStateError(f"{operation} requires loaded records; call load() first")

    @staticmethod
    def _derive(
        state: PipelineState,
        records: Tuple[Record, ...],
        criteria: FilterCriteria,
        sort: SortSpec,
    ) -> DashboardView:
        filtered = tuple(filter_records(records, criteria))
        return DashboardView(
            state=state,
            records=records,
            filtered=filtered,
            sorted_records=tuple(sort_by_spec(filtered, sort)),
            tree=build_tree(filtered),
            totals=sum_metrics(filtered),
            criteria=criteria,
            sort=sort,
        )
