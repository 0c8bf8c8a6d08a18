from __future__ import annotations

from dataclasses import dataclass

from .columns import ColumnSpec
from .display_row import FlattenedDisplayRow

"""Read-only render projection handed to the host UI.

A TablePage is rebuilt on every render from the flattened rows and the
current view state; nothing in it is meant to be mutated.
"""

__all__ = [
    "SortState",
    "Pagination",
    "RenderedRow",
    "TablePage",
]


@dataclass(frozen=True)
class SortState:
    """Active sort column. At most one column is sorted at a time."""
    column: str
    descending: bool = False

    @property
    def direction(self) -> str:
        return "desc" if self.descending else "asc"


@dataclass(frozen=True)
class Pagination:
    page_index: int  # 0-based, clamped into range
    page_size: int
    page_count: int
    total_rows: int  # rows after filtering

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_index < self.page_count - 1


@dataclass(frozen=True)
class RenderedRow:
    row: FlattenedDisplayRow
    selected: bool
    cells: tuple[object, ...]  # values for TablePage.columns, in order (None for select)


@dataclass(frozen=True)
class TablePage:
    columns: tuple[ColumnSpec, ...]  # visible columns only
    rows: tuple[RenderedRow, ...]
    pagination: Pagination
    sort: SortState | None
    filter_text: str
    selected_count: int
    total_rows: int  # rows before filtering

    @property
    def can_bulk_act(self) -> bool:
        """Bulk delete / toggle-disable are only available with a selection."""
        return self.selected_count > 0

    @property
    def all_page_rows_selected(self) -> bool:
        return bool(self.rows) and all(r.selected for r in self.rows)
