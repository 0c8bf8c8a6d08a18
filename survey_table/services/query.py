from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from ..models.columns import COLUMNS, COLUMNS_BY_KEY
from ..models.config_models import DEFAULT_PAGE_SIZE
from ..models.display_row import ROW_FIELDS, FlattenedDisplayRow
from ..models.table_page import Pagination, SortState
from .view_state import UnknownColumnError, ViewStateStore

"""Query / sort / filter engine.

Derives the visible row sequence from the flattened rows:

1. free-text filter (case-insensitive substring over searchable columns)
2. stable single-column sort
3. fixed-size pagination

Rows are loaded into a pandas DataFrame whose index is the row position in
the flattened sequence; every step keeps that index so results map back to
the original FlattenedDisplayRow objects. Column visibility plays no part
here: filtering and sorting always see the full row.
"""

__all__ = [
    "ColumnNotSortableError",
    "QueryResult",
    "QueryEngine",
    "next_sort",
    "compute_pagination",
]

logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS: tuple[str, ...] = tuple(c.field for c in COLUMNS if c.searchable and c.field)


class ColumnNotSortableError(ValueError):
    """Raised when a sort is requested on a column that does not support it."""


def next_sort(current: SortState | None, column: str) -> SortState | None:
    """Advance the header-click sort cycle for ``column``.

    unsorted -> ascending -> descending -> unsorted. Clicking a different
    column than the active one starts that column at ascending.

    Raises:
        UnknownColumnError: column key not in the catalogue
        ColumnNotSortableError: column is not sortable (e.g. select)
    """
    spec = COLUMNS_BY_KEY.get(column)
    if spec is None:
        raise UnknownColumnError(f"unknown column: {column}")
    if not spec.sortable:
        raise ColumnNotSortableError(f"column '{column}' is not sortable")
    if current is None or current.column != column:
        return SortState(column=column, descending=False)
    if not current.descending:
        return SortState(column=column, descending=True)
    return None


def compute_pagination(total_rows: int, page_index: int, page_size: int) -> Pagination:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1 (got {page_size})")
    page_count = math.ceil(total_rows / page_size)
    clamped = min(max(page_index, 0), max(page_count - 1, 0))
    return Pagination(
        page_index=clamped,
        page_size=page_size,
        page_count=page_count,
        total_rows=total_rows,
    )


def _search_text(value: object) -> str:
    """Cell text the filter matches against; whole floats drop the trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class QueryResult:
    filtered_rows: tuple[FlattenedDisplayRow, ...]  # filtered + sorted, all pages
    page_rows: tuple[FlattenedDisplayRow, ...]
    pagination: Pagination


class QueryEngine:
    """Filter, sort and paginate flattened rows.

    The DataFrame built for a row sequence is cached on the identity of
    that sequence, so repeated renders over unchanged rows only pay for the
    filter / sort passes.
    """

    def __init__(self) -> None:
        self._rows: Sequence[FlattenedDisplayRow] | None = None
        self._frame: pd.DataFrame | None = None

    def frame_for(self, rows: Sequence[FlattenedDisplayRow]) -> pd.DataFrame:
        if rows is self._rows and self._frame is not None:
            return self._frame
        frame = pd.DataFrame([r.as_dict() for r in rows], columns=list(ROW_FIELDS))
        self._rows = rows
        self._frame = frame
        return frame

    @staticmethod
    def filter_frame(frame: pd.DataFrame, text: str) -> pd.DataFrame:
        if not text or frame.empty:
            return frame
        needle = text.lower()
        mask = pd.Series(False, index=frame.index)
        for name in SEARCHABLE_FIELDS:
            haystack = frame[name].map(_search_text)
            mask |= haystack.str.lower().str.contains(needle, regex=False)
        return frame[mask]

    @staticmethod
    def sort_frame(frame: pd.DataFrame, sort: SortState | None) -> pd.DataFrame:
        if sort is None or frame.empty:
            return frame
        spec = COLUMNS_BY_KEY.get(sort.column)
        if spec is None:
            raise UnknownColumnError(f"unknown column: {sort.column}")
        if not spec.sortable or spec.field is None:
            raise ColumnNotSortableError(f"column '{sort.column}' is not sortable")
        # mergesort keeps equal keys in their filtered order (both directions)
        return frame.sort_values(by=spec.field, ascending=not sort.descending, kind="mergesort")

    def run(
        self,
        rows: Sequence[FlattenedDisplayRow],
        view_state: ViewStateStore,
        sort: SortState | None = None,
        page_index: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> QueryResult:
        """Derive the filtered, sorted and paginated rows.

        Args:
            rows: Flattened rows in source order
            view_state: Supplies the free-text filter
            sort: Active sort, or None to keep filtered order
            page_index: Requested 0-based page; clamped into range
            page_size: Rows per page

        Returns:
            QueryResult with all filtered rows, the current page and pagination
        """
        frame = self.frame_for(rows)
        frame = self.filter_frame(frame, view_state.filter_text)
        frame = self.sort_frame(frame, sort)
        filtered = tuple(rows[i] for i in frame.index.tolist())

        pagination = compute_pagination(len(filtered), page_index, page_size)
        start = pagination.page_index * page_size
        page_rows = filtered[start:start + page_size]
        logger.debug(
            f"query filter='{view_state.filter_text}' sort={sort} "
            f"rows={len(filtered)}/{len(rows)} page={pagination.page_index}"
        )
        return QueryResult(filtered_rows=filtered, page_rows=page_rows, pagination=pagination)
