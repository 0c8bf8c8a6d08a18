from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo

"""Unit and label converters for survey point display.

These are reporting helpers, not validators: malformed numeric input
(NaN / inf) is passed through the arithmetic instead of raising.
"""

__all__ = [
    "DEFAULT_TIMESTAMP_FORMAT",
    "bits_per_second_to_mbps",
    "rssi_to_quality_percent",
    "format_frequency",
    "format_timestamp",
]

# Locale dependent date + time (strftime %x / %X)
DEFAULT_TIMESTAMP_FORMAT = "%x %X"

_RSSI_FLOOR_DBM = -100
_RSSI_CEILING_DBM = -50


def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def bits_per_second_to_mbps(bits_per_second: float) -> float:
    """Convert a bits/s rate to Mbps rounded to two decimals.

    Rounding is half-up (``0.005`` -> ``0.01``) rather than Python's
    round-half-even, so values match what the survey UI has always shown.

    Examples:
        >>> bits_per_second_to_mbps(123_456_789)
        123.46
        >>> bits_per_second_to_mbps(0)
        0.0
    """
    return _round_half_up(bits_per_second / 1_000_000 * 100) / 100


def rssi_to_quality_percent(rssi: float) -> int:
    """Map an RSSI value in dBm to a 0-100 signal quality percentage."""
    if rssi <= _RSSI_FLOOR_DBM:
        return 0
    if rssi >= _RSSI_CEILING_DBM:
        return 100
    return int(_round_half_up(2 * (rssi + 100)))


def format_frequency(mhz: float | int | str) -> str:
    return f"{mhz} Mhz"


def _is_date_only(text: str) -> bool:
    return "T" not in text and " " not in text and ":" not in text


def _to_datetime(value: int | float | str | datetime) -> datetime:
    """Parse a stored timestamp.

    Naive date-times are returned naive (host local time); date-only
    strings and epoch values are anchored to UTC.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        # epoch milliseconds (Date.now() style)
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None and _is_date_only(text):
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(
    value: int | float | str | datetime,
    tz: tzinfo | None = None,
    fmt: str = DEFAULT_TIMESTAMP_FORMAT,
) -> str:
    """Render a timestamp for display.

    Args:
        value: Epoch milliseconds, ISO-8601 string or datetime
        tz: Target timezone. None renders in host local time
        fmt: strftime pattern (locale sensitive by default)

    Returns:
        Formatted timestamp string. Output varies with locale and platform.

    A date-time without an offset is wall-clock time on the host; a bare
    date (``2024-03-01``) means midnight UTC.
    """
    # astimezone() reads a naive datetime as host local time
    return _to_datetime(value).astimezone(tz).strftime(fmt)
