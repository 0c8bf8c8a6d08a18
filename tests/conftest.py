# Shared pytest fixtures
from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

from survey_table.models.survey_point import ApMapping, SurveyPoint


def make_point_dict(
    point_id: str,
    *,
    bssid: str = "aa:bb:cc:00:00:01",
    rssi: int = -60,
    ssid: str = "office",
    frequency: int = 5180,
    channel: int = 36,
    tcp_down: float = 100_000_000,
    tcp_up: float = 50_000_000,
    udp_down: float = 80_000_000,
    udp_up: float = 40_000_000,
    timestamp: Any = 1_700_000_000_000,
    disabled: bool = False,
    x: float = 10,
    y: float = 20,
) -> dict[str, Any]:
    """Survey point in the stored (camelCase) document shape."""
    return {
        "id": point_id,
        "x": x,
        "y": y,
        "wifiData": {
            "ssid": ssid,
            "bssid": bssid,
            "rssi": rssi,
            "channel": channel,
            "security": "WPA2",
            "txRate": 866,
            "phyMode": "11ac",
            "channelWidth": 80,
            "frequency": frequency,
        },
        "iperfResults": {
            "tcpDownload": {"bitsPerSecond": tcp_down},
            "tcpUpload": {"bitsPerSecond": tcp_up},
            "udpDownload": {"bitsPerSecond": udp_down},
            "udpUpload": {"bitsPerSecond": udp_up},
        },
        "timestamp": timestamp,
        "isDisabled": disabled,
    }


def make_point(point_id: str, **kwargs: Any) -> SurveyPoint:
    return SurveyPoint.from_dict(make_point_dict(point_id, **kwargs))


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def three_points() -> list[SurveyPoint]:
    return [
        make_point("p1", rssi=-45, bssid="aa:bb:cc:00:00:01", ssid="office"),
        make_point("p2", rssi=-70, bssid="aa:bb:cc:00:00:02", ssid="lobby", disabled=True),
        make_point("p3", rssi=-85, bssid="aa:bb:cc:00:00:03", ssid="warehouse"),
    ]


@pytest.fixture()
def ap_mapping() -> list[ApMapping]:
    return [ApMapping(mac_address="aa:bb:cc:00:00:01", ap_name="Router1")]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """page_size: 5
timezone: UTC
timestamp_format: "%Y-%m-%d %H:%M:%S"
columns:
  rssi: true
  timestamp: false
store: ./data/survey.json
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "table.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def survey_document() -> dict[str, Any]:
    return {
        "name": "floor-1",
        "surveyPoints": [
            make_point_dict("p1", rssi=-45),
            make_point_dict("p2", rssi=-70, bssid="aa:bb:cc:00:00:02", disabled=True),
            make_point_dict("p3", rssi=-85, bssid="aa:bb:cc:00:00:03"),
        ],
        "apMapping": [{"apName": "Router1", "macAddress": "aa:bb:cc:00:00:01"}],
    }


@pytest.fixture()
def write_store(temp_workdir: Path, survey_document: dict[str, Any]) -> Path:
    path = temp_workdir / "data" / "survey.json"
    path.write_text(json.dumps(survey_document), encoding="utf-8")
    return path


@pytest.fixture()
def point_factory():
    return make_point


@pytest.fixture()
def point_dict_factory():
    return make_point_dict
