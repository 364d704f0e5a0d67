"""Optional diagnostics for the dashboard.

Nothing here feeds the report payloads. ``format_duration`` and
``local_hour`` are inspection helpers; ``compute_debug`` backs the
``/debug`` endpoint only.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Dict

import pandas as pd

from core.data import table_counts
from core.metrics_visits import load_visit_duration
from core.weights import DEFAULT_WEIGHTS, EventWeights


def format_duration(ms: int) -> str:
    """Render milliseconds as a UTC ``HH:MM:SS`` clock reading (wraps every 24h)."""
    return pd.Timestamp(int(ms), unit="ms", tz="UTC").strftime("%H:%M:%S")


def local_hour(utc_ms: int, timezone: str) -> int:
    """Hour of day (0-23) of an epoch-ms instant in an IANA timezone."""
    return int(pd.Timestamp(int(utc_ms), unit="ms", tz="UTC").tz_convert(timezone).hour)


def compute_debug(conn: sqlite3.Connection, *, weights: EventWeights = DEFAULT_WEIGHTS) -> Dict[str, Any]:
    visits = load_visit_duration(conn)["data"]
    return {
        "row_counts": table_counts(conn),
        "weights": weights.as_dict(),
        "visit_durations": [
            {
                "artist_name": row["artist_name"],
                "duration": row["total_visit_duration"],
                "formatted": format_duration(row["total_visit_duration"]),
            }
            for row in visits
        ],
    }
