from __future__ import annotations

from dataclasses import dataclass, field

from .columns import DEFAULT_VISIBILITY

"""Config dataclasses for the survey points table.

Separate from the loader in survey_table/config/loader.py so that services
can depend on the typed model without pulling in YAML / jsonschema.
"""

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class TableConfig:
    """Root configuration object for a table session."""
    page_size: int = DEFAULT_PAGE_SIZE
    timezone: str | None = None  # IANA name; None = host local time
    timestamp_format: str = "%x %X"
    columns: dict[str, bool] = field(default_factory=dict)  # visibility overrides
    store: str | None = None  # survey JSON document used by the CLI

    @property
    def column_visibility(self) -> dict[str, bool]:
        """Default visibility merged with the configured overrides."""
        merged = dict(DEFAULT_VISIBILITY)
        merged.update(self.columns)
        return merged
