from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from survey_table.config.loader import SCHEMA_PATH
from survey_table.models.columns import COLUMNS, SELECT_COLUMN

"""Config schema contract test."""


@pytest.fixture()
def schema():
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example(schema):
    config = {
        "page_size": 20,
        "timezone": "Europe/Berlin",
        "timestamp_format": "%d.%m.%Y %H:%M",
        "columns": {"rssi": True, "x": True, "y": True, "timestamp": False},
        "store": "./data/floor-1.json",
    }
    jsonschema.validate(config, schema)


def test_config_schema_empty_is_valid(schema):
    jsonschema.validate({}, schema)


def test_config_schema_rejects_extra_keys(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate({"database": {}}, schema)


def test_config_schema_rejects_non_boolean_visibility(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate({"columns": {"rssi": "yes"}}, schema)


def test_config_schema_lists_every_hideable_column(schema):
    """Schema column enum stays in sync with the column catalogue."""
    allowed = set(schema["properties"]["columns"]["propertyNames"]["enum"])
    hideable = {c.key for c in COLUMNS if c.hideable}
    assert allowed == hideable
    assert SELECT_COLUMN not in allowed
