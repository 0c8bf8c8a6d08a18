from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..models.display_row import FlattenedDisplayRow

"""Bulk-action coordinator.

Translates the current selection into calls against the external delete /
update collaborators:

- delete: one batch call with every selected id, only after the
  confirmation gate agrees
- toggle disable: one update call per selected id, all set to the same
  target state

Collaborators are treated as synchronous fire-and-forget calls. There is no
retry or rollback here; an exception raised by a collaborator propagates to
the caller unchanged.
"""

__all__ = [
    "DeleteFn",
    "UpdateFn",
    "ConfirmFn",
    "DELETE_TITLE",
    "DELETE_DESCRIPTION",
    "BulkActionCoordinator",
    "toggle_target_state",
]

logger = logging.getLogger(__name__)

DeleteFn = Callable[[list[str]], Any]
UpdateFn = Callable[[str, dict[str, Any]], Any]
ConfirmFn = Callable[[str, str], bool]

DELETE_TITLE = "Delete Selected"
DELETE_DESCRIPTION = "Are you sure you want to delete the selected rows?"


def toggle_target_state(selected: Sequence[FlattenedDisplayRow]) -> bool:
    """Disabled state a toggle applies to every selected row.

    Only a uniformly disabled selection is re-enabled; a mixed or all
    enabled selection becomes disabled.
    """
    all_disabled = all(r.is_disabled for r in selected)
    return not all_disabled


class BulkActionCoordinator:
    def __init__(self, on_delete: DeleteFn, update_record: UpdateFn, confirm: ConfirmFn) -> None:
        self.on_delete = on_delete
        self.update_record = update_record
        self.confirm = confirm

    def delete_selected(self, selected: Sequence[FlattenedDisplayRow]) -> list[str]:
        """Delete the selected rows after confirmation.

        Args:
            selected: Selected rows, already resolved against the current rows

        Returns:
            The ids passed to on_delete, or an empty list when the selection
            was empty or the user cancelled
        """
        if not selected:
            logger.debug("delete requested with empty selection; ignored")
            return []
        if not self.confirm(DELETE_TITLE, DELETE_DESCRIPTION):
            logger.info(f"delete of {len(selected)} point(s) cancelled")
            return []
        ids = [r.id for r in selected]
        self.on_delete(ids)
        logger.info(f"deleted {len(ids)} point(s)")
        return ids

    def toggle_disable_selected(self, selected: Sequence[FlattenedDisplayRow]) -> bool | None:
        """Set every selected row to one disabled state.

        Returns:
            The target ``is_disabled`` value, or None for an empty selection
        """
        if not selected:
            logger.debug("toggle-disable requested with empty selection; ignored")
            return None
        target = toggle_target_state(selected)
        for row in selected:
            self.update_record(row.id, {"is_disabled": target})
        logger.info(f"{'disabled' if target else 'enabled'} {len(selected)} point(s)")
        return target

    def set_disabled(self, row_id: str, disabled: bool) -> None:
        """Single row switch."""
        self.update_record(row_id, {"is_disabled": bool(disabled)})
