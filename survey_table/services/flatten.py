from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import tzinfo

from ..converters.units import (
    DEFAULT_TIMESTAMP_FORMAT,
    bits_per_second_to_mbps,
    format_frequency,
    format_timestamp,
    rssi_to_quality_percent,
)
from ..models.display_row import FlattenedDisplayRow
from ..models.survey_point import ApMapping, SurveyPoint

"""Row flattener: nested SurveyPoint + AP mapping table -> display rows.

flatten_points() is pure and order preserving. FlattenCache memoises it on
the identity of its two input sequences, so callers can rebuild on every
render without paying for unchanged inputs.
"""

__all__ = [
    "SignalQualityFn",
    "build_ap_labels",
    "resolve_ap_label",
    "flatten_point",
    "flatten_points",
    "FlattenCache",
]

logger = logging.getLogger(__name__)

SignalQualityFn = Callable[[float], float]


def build_ap_labels(mapping: Sequence[ApMapping]) -> dict[str, str]:
    """Build an address -> AP name lookup where the first entry wins.

    A first entry with an empty name still shadows later entries for the
    same address; resolve_ap_label then falls back to the raw address.
    """
    names: dict[str, str] = {}
    for entry in mapping:
        names.setdefault(entry.mac_address, entry.ap_name)
    return names


def resolve_ap_label(address: str, ap_names: dict[str, str]) -> str:
    name = ap_names.get(address)
    if name:
        return f"{name} ({address})"
    return address


def flatten_point(
    point: SurveyPoint,
    ap_names: dict[str, str],
    *,
    signal_quality: SignalQualityFn = rssi_to_quality_percent,
    timezone: tzinfo | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> FlattenedDisplayRow:
    wifi = point.wifi_data
    iperf = point.iperf_results
    return FlattenedDisplayRow(
        id=point.id,
        x=point.x,
        y=point.y,
        ssid=wifi.ssid,
        bssid=resolve_ap_label(wifi.bssid, ap_names),
        rssi=wifi.rssi,
        channel=wifi.channel,
        security=wifi.security,
        tx_rate=wifi.tx_rate,
        phy_mode=wifi.phy_mode,
        channel_width=wifi.channel_width,
        frequency=format_frequency(wifi.frequency),
        tcp_download_mbps=bits_per_second_to_mbps(iperf.tcp_download.bits_per_second),
        tcp_upload_mbps=bits_per_second_to_mbps(iperf.tcp_upload.bits_per_second),
        udp_download_mbps=bits_per_second_to_mbps(iperf.udp_download.bits_per_second),
        udp_upload_mbps=bits_per_second_to_mbps(iperf.udp_upload.bits_per_second),
        signal_quality=signal_quality(wifi.rssi),
        timestamp=format_timestamp(point.timestamp, tz=timezone, fmt=timestamp_format),
        is_disabled=point.is_disabled,
    )


def flatten_points(
    points: Sequence[SurveyPoint],
    mapping: Sequence[ApMapping],
    *,
    signal_quality: SignalQualityFn = rssi_to_quality_percent,
    timezone: tzinfo | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> list[FlattenedDisplayRow]:
    """Flatten survey points into display rows.

    Args:
        points: Survey points in display order
        mapping: AP mapping table (may be empty)
        signal_quality: RSSI (dBm) -> 0..100 percentage
        timezone: Timezone for the timestamp column (None = local)
        timestamp_format: strftime pattern for the timestamp column

    Returns:
        One FlattenedDisplayRow per point, same order as ``points``
    """
    ap_names = build_ap_labels(mapping) if mapping else {}
    return [
        flatten_point(
            p,
            ap_names,
            signal_quality=signal_quality,
            timezone=timezone,
            timestamp_format=timestamp_format,
        )
        for p in points
    ]


class FlattenCache:
    """Memoised flatten_points() keyed on the identity of its inputs.

    A new list object for either points or mapping triggers a rebuild; the
    same objects return the cached rows. Inputs are treated as read-only
    snapshots, so mutating a list in place is not detected.
    """

    def __init__(
        self,
        *,
        signal_quality: SignalQualityFn = rssi_to_quality_percent,
        timezone: tzinfo | None = None,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> None:
        self.signal_quality = signal_quality
        self.timezone = timezone
        self.timestamp_format = timestamp_format
        self._points: Sequence[SurveyPoint] | None = None
        self._mapping: Sequence[ApMapping] | None = None
        self._rows: list[FlattenedDisplayRow] = []
        self.rebuilds = 0

    def get(self, points: Sequence[SurveyPoint], mapping: Sequence[ApMapping]) -> list[FlattenedDisplayRow]:
        if points is self._points and mapping is self._mapping:
            return self._rows
        self._rows = flatten_points(
            points,
            mapping,
            signal_quality=self.signal_quality,
            timezone=self.timezone,
            timestamp_format=self.timestamp_format,
        )
        self._points = points
        self._mapping = mapping
        self.rebuilds += 1
        logger.debug(f"flattened {len(self._rows)} survey points (mapping entries={len(mapping)})")
        return self._rows
