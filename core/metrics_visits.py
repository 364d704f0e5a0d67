from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Mapping

import altair as alt

from core.charts import rows_frame, to_vega_spec
from core.data import run_query, to_records
from core.queries import VisitorKey, visit_duration_sql

VISIT_COLUMNS = ["artist_id", "artist_name", "total_visit_duration", "unique_visitor_count"]


def load_visit_duration(conn: sqlite3.Connection, *, visitor_key: VisitorKey = "session") -> Dict[str, Any]:
    """Total visit duration (ms) and unique visitors per artist, longest first."""
    df = run_query(conn, visit_duration_sql(visitor_key))
    return {"data": to_records(df)}


def visit_duration_chart(rows: List[Mapping[str, Any]]) -> Dict[str, Any]:
    df = rows_frame(rows, VISIT_COLUMNS)
    df["total_minutes"] = df["total_visit_duration"].astype(float) / 60_000
    bars = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("total_minutes:Q", title="Total Visit Duration (min)", axis=alt.Axis(format="~s")),
            y=alt.Y("artist_name:N", title="Artist", sort="-x"),
            color=alt.Color("unique_visitor_count:Q", title="Unique Visitors"),
            tooltip=[
                alt.Tooltip("artist_name:N", title="Artist"),
                alt.Tooltip("total_visit_duration:Q", title="Duration (ms)", format=","),
                alt.Tooltip("unique_visitor_count:Q", title="Unique Visitors"),
            ],
        )
    )
    return to_vega_spec(bars)
