from __future__ import annotations

from pathlib import Path

import pytest

from survey_table.config.loader import ConfigError, apply_env_overrides, load_config
from survey_table.models.config_models import TableConfig


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.page_size == 5
    assert cfg.timezone == "UTC"
    assert cfg.timestamp_format == "%Y-%m-%d %H:%M:%S"
    assert cfg.store == "./data/survey.json"
    assert cfg.columns == {"rssi": True, "timestamp": False}


def test_column_visibility_merges_defaults(write_config: Path):
    visibility = load_config(write_config).column_visibility
    assert visibility["rssi"] is True
    assert visibility["timestamp"] is False
    assert visibility["id"] is True
    assert visibility["ssid"] is False


def test_load_config_empty_file_uses_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "table.yml"
    cfg_path.write_text("", encoding="utf-8")
    assert load_config(cfg_path) == TableConfig()


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(temp_workdir / "config" / "not_exists.yml")
    assert "config file not found" in str(e.value)


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "table.yml"
    cfg_path.write_text("page_size: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(cfg_path)
    assert "invalid yaml" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "extra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_select_column_not_configurable(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("  rssi: true", "  select: false")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_bad_page_size(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("page_size: 5", "page_size: 0")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_unknown_timezone(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("timezone: UTC", "timezone: Mars/Olympus")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "unknown timezone" in str(e.value)


def test_env_overrides(write_config: Path, monkeypatch):
    monkeypatch.setenv("SURVEY_TABLE_STORE", "/tmp/other.json")
    monkeypatch.setenv("SURVEY_TABLE_PAGE_SIZE", "25")
    cfg = load_config(write_config)
    assert cfg.store == "/tmp/other.json"
    assert cfg.page_size == 25


def test_env_override_page_size_invalid(monkeypatch):
    monkeypatch.setenv("SURVEY_TABLE_PAGE_SIZE", "many")
    with pytest.raises(ConfigError):
        apply_env_overrides(TableConfig())


def test_env_overrides_absent_returns_same_config(monkeypatch):
    monkeypatch.delenv("SURVEY_TABLE_STORE", raising=False)
    monkeypatch.delenv("SURVEY_TABLE_PAGE_SIZE", raising=False)
    cfg = TableConfig()
    assert apply_env_overrides(cfg) is cfg
