from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from ..models.columns import COLUMNS, COLUMNS_BY_KEY, DEFAULT_VISIBILITY, ColumnSpec
from ..models.display_row import FlattenedDisplayRow

"""Transient view state for the survey points table.

Holds three independent pieces of state: row selection, column visibility
and the free-text filter. Nothing here is persisted; a store lives as long
as the table session that owns it.

Selection is keyed by record identifier rather than render position, so a
re-sort or re-filter cannot make it point at different records. Positional
selection is still offered (select_positions) and resolved against the row
order current at the time of the call.
"""

__all__ = [
    "UnknownColumnError",
    "ViewStateStore",
]

logger = logging.getLogger(__name__)


class UnknownColumnError(KeyError):
    """Raised when a column key is not in the column catalogue."""


def _column(key: str) -> ColumnSpec:
    try:
        return COLUMNS_BY_KEY[key]
    except KeyError:
        raise UnknownColumnError(f"unknown column: {key}") from None


class ViewStateStore:
    def __init__(
        self,
        column_visibility: Mapping[str, bool] | None = None,
        filter_text: str = "",
    ) -> None:
        self._selected: set[str] = set()
        self._visibility: dict[str, bool] = dict(DEFAULT_VISIBILITY)
        if column_visibility:
            for key, visible in column_visibility.items():
                self.set_column_visible(key, visible)
        self._filter_text = filter_text or ""

    # -- selection -----------------------------------------------------

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def selection_count(self) -> int:
        return len(self._selected)

    def is_selected(self, row_id: str) -> bool:
        return row_id in self._selected

    def select(self, row_id: str) -> None:
        self._selected.add(row_id)

    def deselect(self, row_id: str) -> None:
        self._selected.discard(row_id)

    def toggle(self, row_id: str) -> bool:
        """Flip selection of one row. Returns the new state."""
        if row_id in self._selected:
            self._selected.discard(row_id)
            return False
        self._selected.add(row_id)
        return True

    def set_selected(self, row_ids: Iterable[str], selected: bool = True) -> None:
        if selected:
            self._selected.update(row_ids)
        else:
            self._selected.difference_update(row_ids)

    def select_positions(self, positions: Iterable[int], rows: Sequence[FlattenedDisplayRow]) -> None:
        """Select rows by position in ``rows``.

        Raises:
            IndexError: if a position is outside ``rows``
        """
        ids = []
        for i in positions:
            if not 0 <= i < len(rows):
                raise IndexError(f"row position out of range: {i} (rows={len(rows)})")
            ids.append(rows[i].id)
        self._selected.update(ids)

    def clear_selection(self) -> None:
        self._selected.clear()

    def selected_rows(self, rows: Sequence[FlattenedDisplayRow]) -> list[FlattenedDisplayRow]:
        """Resolve the selection against ``rows``, keeping their order.

        Identifiers with no matching row (e.g. already deleted) are skipped.
        """
        return [r for r in rows if r.id in self._selected]

    def prune_selection(self, rows: Sequence[FlattenedDisplayRow]) -> int:
        """Drop selected ids that no longer exist in ``rows``. Returns the count dropped."""
        present = {r.id for r in rows}
        stale = self._selected - present
        self._selected -= stale
        return len(stale)

    # -- column visibility ---------------------------------------------

    @property
    def column_visibility(self) -> dict[str, bool]:
        return dict(self._visibility)

    def is_column_visible(self, key: str) -> bool:
        return self._visibility[_column(key).key]

    def set_column_visible(self, key: str, visible: bool) -> None:
        column = _column(key)
        if not column.hideable:
            if not visible:
                logger.debug(f"column '{key}' cannot be hidden; ignoring")
            return
        self._visibility[key] = bool(visible)

    def toggle_column(self, key: str) -> bool:
        """Flip visibility of a hideable column. Returns the new visibility."""
        self.set_column_visible(key, not self.is_column_visible(key))
        return self._visibility[key]

    def visible_columns(self) -> tuple[ColumnSpec, ...]:
        return tuple(c for c in COLUMNS if self._visibility[c.key])

    def hideable_columns(self) -> tuple[ColumnSpec, ...]:
        return tuple(c for c in COLUMNS if c.hideable)

    # -- filter --------------------------------------------------------

    @property
    def filter_text(self) -> str:
        return self._filter_text

    def set_filter(self, text: str | None) -> None:
        self._filter_text = text or ""
