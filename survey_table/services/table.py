from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from zoneinfo import ZoneInfo

from ..converters.units import rssi_to_quality_percent
from ..models.config_models import TableConfig
from ..models.display_row import FlattenedDisplayRow
from ..models.survey_point import ApMapping, SurveyPoint
from ..models.table_page import RenderedRow, SortState, TablePage
from .bulk_actions import BulkActionCoordinator, ConfirmFn, DeleteFn, UpdateFn
from .flatten import FlattenCache, SignalQualityFn
from .query import QueryEngine, QueryResult, next_sort
from .view_state import ViewStateStore

"""Survey points table session.

Wires the flattener, view-state store, query engine and bulk-action
coordinator together and exposes the named user actions plus a read-only
render projection (TablePage) for the host UI.

Everything is synchronous and single threaded. render() has no side
effects; derived rows are rebuilt only when the data snapshots change.
"""

__all__ = [
    "SurveyPointsTable",
]

logger = logging.getLogger(__name__)


class SurveyPointsTable:
    """One table session over a snapshot of survey points.

    Args:
        points: Survey points in display order (read-only snapshot)
        mapping: AP mapping table (read-only snapshot)
        on_delete: Batch deletion collaborator, called with a list of ids
        update_record: Per-record update collaborator, called with (id, patch)
        confirm: Confirmation gate, called with (title, description)
        signal_quality: RSSI -> quality percentage collaborator
        config: Page size, timestamp rendering and default column visibility
    """

    def __init__(
        self,
        points: Sequence[SurveyPoint],
        mapping: Sequence[ApMapping],
        *,
        on_delete: DeleteFn,
        update_record: UpdateFn,
        confirm: ConfirmFn,
        signal_quality: SignalQualityFn = rssi_to_quality_percent,
        config: TableConfig | None = None,
    ) -> None:
        config = config or TableConfig()
        self.config = config
        self.page_size = config.page_size
        self._points = points
        self._mapping = mapping
        self._flatten = FlattenCache(
            signal_quality=signal_quality,
            timezone=ZoneInfo(config.timezone) if config.timezone else None,
            timestamp_format=config.timestamp_format,
        )
        self._engine = QueryEngine()
        self._actions = BulkActionCoordinator(on_delete, update_record, confirm)
        self.view_state = ViewStateStore(config.column_visibility)
        self.sort: SortState | None = None
        self.page_index = 0

    # -- data ----------------------------------------------------------

    @property
    def rows(self) -> list[FlattenedDisplayRow]:
        """Flattened rows in source order."""
        return self._flatten.get(self._points, self._mapping)

    def set_data(self, points: Sequence[SurveyPoint], mapping: Sequence[ApMapping] | None = None) -> None:
        """Replace the record snapshot (e.g. after the owner applied a delete)."""
        self._points = points
        if mapping is not None:
            self._mapping = mapping
        self.view_state.prune_selection(self.rows)
        self.page_index = 0

    def query(self) -> QueryResult:
        return self._engine.run(
            self.rows,
            self.view_state,
            sort=self.sort,
            page_index=self.page_index,
            page_size=self.page_size,
        )

    # -- selection -----------------------------------------------------

    def select_row(self, row_id: str) -> None:
        self.view_state.select(row_id)

    def deselect_row(self, row_id: str) -> None:
        self.view_state.deselect(row_id)

    def toggle_row(self, row_id: str) -> bool:
        return self.view_state.toggle(row_id)

    def select_positions(self, positions: Iterable[int]) -> None:
        """Select rows by their position in source order."""
        self.view_state.select_positions(positions, self.rows)

    def select_all(self) -> None:
        """Select every row matching the current filter, across all pages."""
        self.view_state.set_selected(r.id for r in self.query().filtered_rows)

    def deselect_all(self) -> None:
        self.view_state.clear_selection()

    def toggle_page_selection(self, selected: bool) -> None:
        """Header checkbox: (de)select the rows on the current page."""
        self.view_state.set_selected((r.id for r in self.query().page_rows), selected)

    def selected_rows(self) -> list[FlattenedDisplayRow]:
        return self.view_state.selected_rows(self.rows)

    # -- bulk actions --------------------------------------------------

    def delete_selected(self) -> list[str]:
        """Delete the selection through the confirmation gate.

        Deleted ids leave the selection immediately; this is not undone if
        the collaborator later fails to apply the delete.
        """
        deleted = self._actions.delete_selected(self.selected_rows())
        if deleted:
            self.view_state.set_selected(deleted, False)
        return deleted

    def toggle_disable_selected(self) -> bool | None:
        return self._actions.toggle_disable_selected(self.selected_rows())

    def set_point_disabled(self, row_id: str, disabled: bool) -> None:
        self._actions.set_disabled(row_id, disabled)

    # -- filter / columns / sort ---------------------------------------

    def set_filter(self, text: str | None) -> None:
        self.view_state.set_filter(text)
        self.page_index = 0

    def set_column_visible(self, key: str, visible: bool) -> None:
        self.view_state.set_column_visible(key, visible)

    def toggle_column(self, key: str) -> bool:
        return self.view_state.toggle_column(key)

    def toggle_sort(self, column: str) -> SortState | None:
        """Header click on ``column``. Returns the new sort state."""
        self.sort = next_sort(self.sort, column)
        self.page_index = 0
        return self.sort

    # -- pagination ----------------------------------------------------

    def next_page(self) -> bool:
        pagination = self.query().pagination
        if not pagination.has_next:
            return False
        self.page_index = pagination.page_index + 1
        return True

    def previous_page(self) -> bool:
        pagination = self.query().pagination
        if not pagination.has_previous:
            return False
        self.page_index = pagination.page_index - 1
        return True

    def go_to_page(self, page_index: int) -> int:
        """Jump to a 0-based page. Returns the page actually shown after clamping."""
        self.page_index = page_index
        self.page_index = self.query().pagination.page_index
        return self.page_index

    # -- render --------------------------------------------------------

    def render(self) -> TablePage:
        result = self.query()
        columns = self.view_state.visible_columns()
        rendered = tuple(
            RenderedRow(
                row=row,
                selected=self.view_state.is_selected(row.id),
                cells=tuple(getattr(row, c.field) if c.field else None for c in columns),
            )
            for row in result.page_rows
        )
        return TablePage(
            columns=columns,
            rows=rendered,
            pagination=result.pagination,
            sort=self.sort,
            filter_text=self.view_state.filter_text,
            selected_count=len(self.selected_rows()),
            total_rows=len(self.rows),
        )
