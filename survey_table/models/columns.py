from __future__ import annotations

from dataclasses import dataclass

"""Static column catalogue for the survey points table.

Column order is the render order. ``field`` names the FlattenedDisplayRow
attribute a column reads; the selection column has no field and takes part
in neither sorting, filtering nor hiding.
"""

__all__ = [
    "ColumnSpec",
    "COLUMNS",
    "COLUMNS_BY_KEY",
    "SELECT_COLUMN",
    "DEFAULT_VISIBILITY",
]

SELECT_COLUMN = "select"


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    header: str
    field: str | None = None  # FlattenedDisplayRow attribute
    sortable: bool = True
    hideable: bool = True
    searchable: bool = True  # included in free-text filtering
    default_visible: bool = False


COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec(SELECT_COLUMN, "", sortable=False, hideable=False, searchable=False, default_visible=True),
    ColumnSpec("id", "ID", "id", default_visible=True),
    ColumnSpec("disable", "Disable", "is_disabled", searchable=False, default_visible=True),
    ColumnSpec("rssi", "RSSI [dBm]", "rssi"),
    ColumnSpec("signal_quality", "Signal Quality [%]", "signal_quality", default_visible=True),
    ColumnSpec("bssid", "BSSID", "bssid", default_visible=True),
    ColumnSpec("frequency", "Frequency", "frequency", default_visible=True),
    ColumnSpec("channel", "Channel", "channel"),
    ColumnSpec("tcp_download_mbps", "TCP Down [Mbps]", "tcp_download_mbps", default_visible=True),
    ColumnSpec("tcp_upload_mbps", "TCP Up [Mbps]", "tcp_upload_mbps", default_visible=True),
    ColumnSpec("udp_download_mbps", "UDP Down [Mbps]", "udp_download_mbps", default_visible=True),
    ColumnSpec("udp_upload_mbps", "UDP Up [Mbps]", "udp_upload_mbps", default_visible=True),
    ColumnSpec("timestamp", "Timestamp", "timestamp", default_visible=True),
    ColumnSpec("ssid", "SSID", "ssid"),
    ColumnSpec("security", "Security", "security"),
    ColumnSpec("tx_rate", "TX Rate", "tx_rate"),
    ColumnSpec("phy_mode", "PHY Mode", "phy_mode"),
    ColumnSpec("channel_width", "Channel Width", "channel_width"),
    ColumnSpec("x", "X", "x"),
    ColumnSpec("y", "Y", "y"),
)

COLUMNS_BY_KEY: dict[str, ColumnSpec] = {c.key: c for c in COLUMNS}

DEFAULT_VISIBILITY: dict[str, bool] = {c.key: c.default_visible for c in COLUMNS}
