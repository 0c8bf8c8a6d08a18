from __future__ import annotations

import time
from datetime import timezone
from unittest.mock import Mock

from survey_table.models.config_models import TableConfig
from survey_table.services.flatten import flatten_points
from survey_table.services.table import SurveyPointsTable

"""Performance smoke test: a few thousand points render interactively."""

POINTS = 5_000


def test_flatten_and_render_budget(point_factory):
    points = [point_factory(f"p{i}", rssi=-30 - (i % 70)) for i in range(POINTS)]

    start = time.perf_counter()
    rows = flatten_points(points, [], timezone=timezone.utc)
    assert len(rows) == POINTS

    table = SurveyPointsTable(
        points,
        [],
        on_delete=Mock(),
        update_record=Mock(),
        confirm=Mock(return_value=True),
        config=TableConfig(timezone="UTC"),
    )
    table.set_filter("p4")
    table.toggle_sort("rssi")
    page = table.render()
    elapsed = time.perf_counter() - start

    assert page.pagination.total_rows > 0
    # lenient budget so CI stays stable
    assert elapsed < 10.0, f"flatten + render too slow: {elapsed:.3f}s"
