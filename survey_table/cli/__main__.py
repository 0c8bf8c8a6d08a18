from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import pandas as pd
from dotenv import load_dotenv

from survey_table.config.loader import DEFAULT_CONFIG_PATH, ConfigError, apply_env_overrides, load_config
from survey_table.logging.init import log_summary, set_debug, setup_logging
from survey_table.models.columns import SELECT_COLUMN
from survey_table.models.config_models import TableConfig
from survey_table.models.table_page import TablePage
from survey_table.services.progress import ProgressTracker
from survey_table.services.query import ColumnNotSortableError
from survey_table.services.summary import render_summary_line
from survey_table.services.table import SurveyPointsTable
from survey_table.services.view_state import UnknownColumnError
from survey_table.store.json_store import JsonPointStore, StoreError

"""CLI entrypoint.

Loads a survey JSON document, applies view options (filter, sort, columns,
page), optionally runs a bulk action on the selected rows, prints the page
and a SUMMARY line.

Delete always goes through a y/N confirmation prompt unless --yes is given.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_ACTION_SKIPPED = 2  # bulk action requested but nothing selected / cancelled


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv so SURVEY_TABLE_* values take effect."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Survey points table: view, select and bulk edit survey points")
    p.add_argument("store", nargs="?", help="Survey JSON document (defaults to config 'store')")
    p.add_argument("--config", type=Path, default=None, help=f"Config YAML (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--filter", default="", help="Free-text filter across all columns")
    p.add_argument("--sort", metavar="COLUMN", help="Sort by column key (ascending)")
    p.add_argument("--desc", action="store_true", help="Sort descending")
    p.add_argument("--page", type=int, default=1, help="1-based page number")
    p.add_argument("--show", action="append", default=[], metavar="COLUMN", help="Show a column")
    p.add_argument("--hide", action="append", default=[], metavar="COLUMN", help="Hide a column")
    p.add_argument("--select", default="", metavar="POS[,POS...]", help="Select rows by 0-based position in the store")
    p.add_argument("--select-all", action="store_true", help="Select every row matching the filter")
    p.add_argument("--delete", action="store_true", help="Delete the selected rows")
    p.add_argument("--toggle-disable", action="store_true", help="Toggle disable on the selected rows")
    p.add_argument("--yes", action="store_true", help="Do not prompt before deleting")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config(path: Path | None) -> TableConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return apply_env_overrides(TableConfig())


def _parse_positions(text: str) -> list[int]:
    return [int(part) for part in text.split(",") if part.strip()]


def _prompt_confirm(title: str, description: str) -> bool:
    print(f"{title}: {description}")
    try:
        answer = input("[y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def render_text_table(page: TablePage) -> str:
    """Plain-text rendering of a TablePage (selection column shown as [x])."""
    if not page.rows:
        return "No results."
    headers = ["Sel" if c.key == SELECT_COLUMN else c.header for c in page.columns]
    if page.sort is not None:
        headers = [
            f"{h} ({page.sort.direction})" if c.key == page.sort.column else h
            for c, h in zip(page.columns, headers, strict=True)
        ]
    data: list[list[Any]] = []
    for rendered in page.rows:
        data.append([
            ("[x]" if rendered.selected else "[ ]") if c.key == SELECT_COLUMN else cell
            for c, cell in zip(page.columns, rendered.cells, strict=True)
        ])
    frame = pd.DataFrame(data, columns=headers)
    return frame.to_string(index=False)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # argv=[] (tests) must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    store_path = args.store or cfg.store
    if not store_path:
        logger.error("no survey store given (argument or config 'store')")
        return EXIT_FATAL
    store = JsonPointStore(Path(store_path))
    try:
        points, mapping = store.load()
    except StoreError as e:
        logger.error(f"store: {e}")
        return EXIT_FATAL
    logger.info(f"Loaded {len(points)} survey point(s) from: {store.path}")

    progress: ProgressTracker | None = None

    def update_record(point_id: str, patch: dict[str, Any]) -> None:
        store.update_point(point_id, patch)
        if progress is not None:
            progress.advance(point_id)

    confirm = (lambda title, description: True) if args.yes else _prompt_confirm
    table = SurveyPointsTable(
        points,
        mapping,
        on_delete=store.delete_points,
        update_record=update_record,
        confirm=confirm,
        config=cfg,
    )

    try:
        for key in args.show:
            table.set_column_visible(key, True)
        for key in args.hide:
            table.set_column_visible(key, False)
        table.set_filter(args.filter)
        if args.sort:
            table.toggle_sort(args.sort)
            if args.desc:
                table.toggle_sort(args.sort)
        if args.select:
            table.select_positions(_parse_positions(args.select))
        if args.select_all:
            table.select_all()
    except (UnknownColumnError, ColumnNotSortableError, IndexError, ValueError) as e:
        logger.error(f"options: {e}")
        return EXIT_FATAL

    exit_code = EXIT_SUCCESS
    try:
        if args.delete:
            if not table.selected_rows():
                logger.warning("delete: nothing selected")
                exit_code = EXIT_ACTION_SKIPPED
            elif not table.delete_selected():
                exit_code = EXIT_ACTION_SKIPPED
        if args.toggle_disable:
            selected = table.selected_rows()
            if not selected:
                logger.warning("toggle-disable: nothing selected")
                exit_code = EXIT_ACTION_SKIPPED
            else:
                with ProgressTracker(len(selected), description="Updating points") as progress:
                    table.toggle_disable_selected()
                progress = None
        if store.dirty:
            store.save()
            logger.info(f"Saved changes to: {store.path}")
            table.set_data(store.load()[0])
    except StoreError as e:
        logger.error(f"store: {e}")
        return EXIT_FATAL

    table.go_to_page(args.page - 1)
    page = table.render()
    print(render_text_table(page))

    log_summary(render_summary_line(page))
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
