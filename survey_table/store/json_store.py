from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..models.survey_point import ApMapping, SurveyPoint

"""JSON survey document adapter used by the CLI host.

Reads the document the survey application already writes (``surveyPoints``
plus an optional ``apMapping`` array) and implements the delete / update
collaborator contracts the table expects. All other keys in the document
are carried through untouched on save().
"""

__all__ = [
    "StoreError",
    "PATCH_KEYS",
    "JsonPointStore",
]

logger = logging.getLogger(__name__)

# table patch key -> document key
PATCH_KEYS = {
    "is_disabled": "isDisabled",
}


class StoreError(Exception):
    """Raised for unreadable / malformed documents and unknown point ids."""


class JsonPointStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._document: dict[str, Any] | None = None
        self.dirty = False

    @property
    def document(self) -> dict[str, Any]:
        if self._document is None:
            self._document = self._read()
        return self._document

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            raise StoreError(f"store not found: {self.path}")
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreError(f"invalid json in {self.path}: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("surveyPoints"), list):
            raise StoreError(f"{self.path}: expected an object with a 'surveyPoints' array")
        return data

    def load(self) -> tuple[list[SurveyPoint], list[ApMapping]]:
        """Parse the document into fresh point / mapping snapshots."""
        doc = self.document
        try:
            points = [SurveyPoint.from_dict(p) for p in doc["surveyPoints"]]
            mapping = [ApMapping.from_dict(m) for m in doc.get("apMapping") or []]
        except (KeyError, TypeError, AttributeError) as e:
            raise StoreError(f"{self.path}: malformed survey document: {e!r}") from e
        return points, mapping

    def _find(self, point_id: str) -> dict[str, Any]:
        for raw in self.document["surveyPoints"]:
            if str(raw.get("id")) == point_id:
                return raw
        raise StoreError(f"unknown survey point: {point_id}")

    def delete_points(self, ids: Iterable[str]) -> int:
        """Remove points by id. Unknown ids are ignored. Returns the count removed."""
        targets = set(ids)
        before = self.document["surveyPoints"]
        kept = [p for p in before if str(p.get("id")) not in targets]
        removed = len(before) - len(kept)
        self.document["surveyPoints"] = kept
        if removed:
            self.dirty = True
        logger.debug(f"store: removed {removed} point(s) from {self.path}")
        return removed

    def update_point(self, point_id: str, patch: dict[str, Any]) -> None:
        raw = self._find(point_id)
        for key, value in patch.items():
            doc_key = PATCH_KEYS.get(key)
            if doc_key is None:
                raise StoreError(f"unsupported patch field: {key}")
            raw[doc_key] = value
        self.dirty = True

    def save(self) -> Path:
        if self._document is None:
            return self.path
        self.path.write_text(json.dumps(self._document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        self.dirty = False
        return self.path
