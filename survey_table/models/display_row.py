from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

"""FlattenedDisplayRow model.

One row per SurveyPoint after flattening. Pure derived state: rebuilt from
(SurveyPoint, ApMapping list) on every render and never persisted.
"""

__all__ = [
    "FlattenedDisplayRow",
    "ROW_FIELDS",
]


@dataclass(frozen=True)
class FlattenedDisplayRow:
    id: str
    x: float
    y: float
    ssid: str
    bssid: str  # "<ap name> (<address>)" or the raw address
    rssi: int
    channel: int
    security: str
    tx_rate: float
    phy_mode: str
    channel_width: int
    frequency: str  # "<value> Mhz"
    tcp_download_mbps: float
    tcp_upload_mbps: float
    udp_download_mbps: float
    udp_upload_mbps: float
    signal_quality: float
    timestamp: str  # formatted for display
    is_disabled: bool

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


ROW_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(FlattenedDisplayRow))
