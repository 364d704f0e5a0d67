from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Mapping, Optional

import altair as alt

from core import data
from core.charts import rows_frame, to_vega_spec
from core.queries import hourly_engagement_sql
from core.weights import DEFAULT_WEIGHTS, EventWeights

logger = logging.getLogger(__name__)

ENGAGEMENT_COLUMNS = [
    "artist_id",
    "artist_name",
    "hour_of_day",
    "number_of_users",
    "play_track_count",
    "share_track_count",
    "add_track_to_playlist_count",
    "like_track_count",
    "engagement_score",
]


def load_hourly_engagement(
    conn: sqlite3.Connection,
    *,
    weights: EventWeights = DEFAULT_WEIGHTS,
    log_rows: Optional[bool] = None,
) -> Dict[str, Any]:
    """Per-artist, per-UTC-hour event counts ranked by weighted engagement score."""
    df = data.run_query(conn, hourly_engagement_sql(weights))
    rows = data.to_records(df)
    if log_rows is None:
        log_rows = data.LOG_REPORT_ROWS
    if log_rows:
        logger.debug("hourly engagement rows=%d data=%s", len(rows), rows)
    return {"data": rows}


def hourly_engagement_chart(rows: List[Mapping[str, Any]]) -> Dict[str, Any]:
    df = rows_frame(rows, ENGAGEMENT_COLUMNS)
    hover = alt.selection_point(fields=["artist_name"], on="mouseover", empty="all")
    heatmap = (
        alt.Chart(df)
        .mark_rect()
        .encode(
            x=alt.X("hour_of_day:O", title="Hour of Day (UTC)", sort="ascending"),
            y=alt.Y("artist_name:N", title="Artist"),
            color=alt.Color("engagement_score:Q", title="Engagement Score", scale=alt.Scale(scheme="blues")),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.4)),
            tooltip=[
                alt.Tooltip("artist_name:N", title="Artist"),
                alt.Tooltip("hour_of_day:O", title="Hour"),
                alt.Tooltip("number_of_users:Q", title="Users"),
                alt.Tooltip("play_track_count:Q", title="Plays"),
                alt.Tooltip("like_track_count:Q", title="Likes"),
                alt.Tooltip("add_track_to_playlist_count:Q", title="Playlist Adds"),
                alt.Tooltip("share_track_count:Q", title="Shares"),
                alt.Tooltip("engagement_score:Q", title="Score"),
            ],
        )
        .add_params(hover)
    )
    return to_vega_spec(heatmap)
