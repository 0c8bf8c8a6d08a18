from __future__ import annotations

from ..models.table_page import TablePage

"""Summary line rendering for the survey points table.

Contract format:
SUMMARY rows={filtered}/{total} selected={n} page={page}/{pages} columns={visible}
"""


def render_summary_line(page: TablePage) -> str:
    """Render a SUMMARY line from a rendered TablePage.

    Page numbers are 1-based; an empty result renders as ``page=0/0``.

    Examples:
        >>> from survey_table.models.table_page import Pagination, TablePage
        >>> page = TablePage(
        ...     columns=(), rows=(), sort=None, filter_text="", selected_count=0,
        ...     total_rows=0, pagination=Pagination(0, 10, 0, 0),
        ... )
        >>> render_summary_line(page)
        'SUMMARY rows=0/0 selected=0 page=0/0 columns=0'
    """
    pagination = page.pagination
    current = pagination.page_index + 1 if pagination.page_count else 0
    return (
        f"SUMMARY rows={pagination.total_rows}/{page.total_rows} "
        f"selected={page.selected_count} "
        f"page={current}/{pagination.page_count} "
        f"columns={len(page.columns)}"
    )
