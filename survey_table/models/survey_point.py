from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""Survey point domain models.

SurveyPoint / ApMapping are read-only inputs owned by the surrounding
application. ``from_dict`` accepts the camelCase JSON document shape the
application persists (wifiData, iperfResults, isDisabled, ...).
"""

__all__ = [
    "WifiData",
    "IperfTestResult",
    "IperfResults",
    "SurveyPoint",
    "ApMapping",
]


@dataclass(frozen=True)
class WifiData:
    """Wireless link snapshot taken at a survey point."""
    ssid: str
    bssid: str  # access point hardware address
    rssi: int  # dBm
    channel: int
    security: str = ""
    tx_rate: float = 0
    phy_mode: str = ""
    channel_width: int = 0
    frequency: int = 0  # MHz

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> WifiData:
        return WifiData(
            ssid=raw.get("ssid", ""),
            bssid=raw.get("bssid", ""),
            rssi=raw.get("rssi", 0),
            channel=raw.get("channel", 0),
            security=raw.get("security", ""),
            tx_rate=raw.get("txRate", 0),
            phy_mode=raw.get("phyMode", ""),
            channel_width=raw.get("channelWidth", 0),
            frequency=raw.get("frequency", 0),
        )


@dataclass(frozen=True)
class IperfTestResult:
    bits_per_second: float

    @staticmethod
    def from_dict(raw: Mapping[str, Any] | None) -> IperfTestResult:
        if not raw:
            return IperfTestResult(bits_per_second=0)
        value = raw.get("bitsPerSecond")
        # null means the test never ran
        return IperfTestResult(bits_per_second=0 if value is None else value)


@dataclass(frozen=True)
class IperfResults:
    """Four directional throughput test results."""
    tcp_download: IperfTestResult
    tcp_upload: IperfTestResult
    udp_download: IperfTestResult
    udp_upload: IperfTestResult

    @staticmethod
    def from_dict(raw: Mapping[str, Any] | None) -> IperfResults:
        raw = raw or {}
        return IperfResults(
            tcp_download=IperfTestResult.from_dict(raw.get("tcpDownload")),
            tcp_upload=IperfTestResult.from_dict(raw.get("tcpUpload")),
            udp_download=IperfTestResult.from_dict(raw.get("udpDownload")),
            udp_upload=IperfTestResult.from_dict(raw.get("udpUpload")),
        )


@dataclass(frozen=True)
class SurveyPoint:
    """One measurement sample: location + wireless link + throughput."""
    id: str
    x: float
    y: float
    wifi_data: WifiData
    iperf_results: IperfResults
    timestamp: int | float | str  # epoch ms or ISO-8601
    is_disabled: bool = False

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> SurveyPoint:
        """Build a SurveyPoint from a stored JSON object.

        Raises:
            KeyError: if ``id`` or ``wifiData`` is missing
        """
        return SurveyPoint(
            id=str(raw["id"]),
            x=raw.get("x", 0),
            y=raw.get("y", 0),
            wifi_data=WifiData.from_dict(raw["wifiData"]),
            iperf_results=IperfResults.from_dict(raw.get("iperfResults")),
            timestamp=raw.get("timestamp", 0),
            is_disabled=bool(raw.get("isDisabled", False)),
        )


@dataclass(frozen=True)
class ApMapping:
    """User supplied friendly name for an access point address."""
    mac_address: str
    ap_name: str

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> ApMapping:
        return ApMapping(mac_address=raw["macAddress"], ap_name=raw.get("apName", ""))
