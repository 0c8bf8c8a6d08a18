#!/usr/bin/env python3
"""Synthetic survey document generator.

Writes a JSON document in the shape the survey application stores
(``surveyPoints`` + ``apMapping``) so the table CLI and the perf tests can be
exercised against realistic sizes without running a real site survey.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

CHANNELS_24 = [1, 6, 11]
CHANNELS_5 = [36, 40, 44, 48, 149, 153, 157, 161]


def channel_to_frequency(channel: int) -> int:
    if channel <= 14:
        return 2407 + channel * 5
    return 5000 + channel * 5


def generate_survey_points(points: int, access_points: int, seed: int = 42) -> list[dict[str, Any]]:
    """Generate survey points scattered over a 1000x800 floor plan.

    Args:
        points: Number of survey points
        access_points: Number of distinct BSSIDs the points attach to
        seed: Random seed for reproducible data

    Returns:
        Survey points in the stored camelCase shape
    """
    rng = np.random.default_rng(seed)
    bssids = [f"aa:bb:cc:00:{i // 256:02x}:{i % 256:02x}" for i in range(access_points)]
    timestamps = pd.date_range("2024-01-01", periods=points, freq="45s", tz="UTC")

    result: list[dict[str, Any]] = []
    for i in range(points):
        channel = int(rng.choice(CHANNELS_24 + CHANNELS_5))
        rssi = int(np.clip(rng.normal(-62, 10), -95, -30))
        # throughput loosely follows signal strength
        base = max(5e6, (rssi + 100) * 12e6)
        result.append({
            "id": f"point_{i + 1}",
            "x": int(rng.integers(0, 1000)),
            "y": int(rng.integers(0, 800)),
            "wifiData": {
                "ssid": "survey-net",
                "bssid": str(rng.choice(bssids)),
                "rssi": rssi,
                "channel": channel,
                "security": "WPA2 Personal",
                "txRate": int(rng.choice([144, 300, 433, 866, 1200])),
                "phyMode": "802.11ac" if channel > 14 else "802.11n",
                "channelWidth": 80 if channel > 14 else 20,
                "frequency": channel_to_frequency(channel),
            },
            "iperfResults": {
                "tcpDownload": {"bitsPerSecond": float(round(base * rng.uniform(0.8, 1.1)))},
                "tcpUpload": {"bitsPerSecond": float(round(base * rng.uniform(0.5, 0.9)))},
                "udpDownload": {"bitsPerSecond": float(round(base * rng.uniform(0.9, 1.2)))},
                "udpUpload": {"bitsPerSecond": float(round(base * rng.uniform(0.6, 1.0)))},
            },
            "timestamp": int(timestamps[i].timestamp() * 1000),
            "isDisabled": bool(rng.random() < 0.05),
        })
    return result


def generate_ap_mapping(access_points: int) -> list[dict[str, str]]:
    return [
        {"apName": f"AP-{i + 1:02d}", "macAddress": f"aa:bb:cc:00:{i // 256:02x}:{i % 256:02x}"}
        for i in range(access_points)
        if i % 2 == 0  # leave every other AP unnamed
    ]


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic survey JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/survey.json
  %(prog)s data/large.json --points 20000 --access-points 40 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output JSON file path")
    parser.add_argument("--points", type=int, default=500, help="Number of survey points (default: 500)")
    parser.add_argument("--access-points", type=int, default=8, help="Distinct BSSIDs (default: 8)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.points <= 0:
        print("Error: --points must be positive", file=sys.stderr)
        return 1
    if args.access_points <= 0:
        print("Error: --access-points must be positive", file=sys.stderr)
        return 1

    document = {
        "name": args.output.stem,
        "surveyPoints": generate_survey_points(args.points, args.access_points, args.seed),
        "apMapping": generate_ap_mapping(args.access_points),
    }
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(document, indent=2), encoding="utf-8")
    print(f"Created survey document: {args.output}")
    print(f"  Points: {args.points:,}")
    print(f"  Access points: {args.access_points} ({len(document['apMapping'])} named)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
