from __future__ import annotations

import re

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+rows=([0-9]+)/([0-9]+)\s+selected=([0-9]+)\s+"
    r"page=([0-9]+)/([0-9]+)\s+columns=([0-9]+)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY rows=12/40 selected=3 page=2/2 columns=11"
    m = SUMMARY_PATTERN.match(line)
    assert m, "SUMMARY line should match contract regex"


def test_summary_pattern_rejects_missing_fields():
    assert SUMMARY_PATTERN.match("SUMMARY rows=12/40 page=2/2") is None
