from __future__ import annotations

from typing import Literal

from core.weights import DEFAULT_WEIGHTS, EventWeights

VisitorKey = Literal["session", "user"]

_VISITOR_COLUMNS = {"session": "v.session_id", "user": "s.user_id"}

# total_visit_duration stays in milliseconds; unique visitors are distinct sessions.
# See DESIGN.md for the open questions on both.
_VISIT_DURATION_TEMPLATE = """
SELECT
    a.id AS artist_id,
    a.name AS artist_name,
    SUM(v.end_time - v.start_time) AS total_visit_duration,
    COUNT(DISTINCT {visitor_column}) AS unique_visitor_count
FROM artists a
JOIN visits v ON a.id = v.artist_id
JOIN sessions s ON v.session_id = s.id
GROUP BY a.id, a.name
ORDER BY total_visit_duration DESC
"""


def visit_duration_sql(visitor_key: VisitorKey = "session") -> str:
    if visitor_key not in _VISITOR_COLUMNS:
        raise ValueError(f"Unknown visitor key: {visitor_key!r}")
    return _VISIT_DURATION_TEMPLATE.format(visitor_column=_VISITOR_COLUMNS[visitor_key])


VISIT_DURATION_SQL = visit_duration_sql()


# hour_of_day is the UTC hour; users.timezone is joined but not applied.
_HOURLY_ENGAGEMENT_TEMPLATE = """
WITH hourly_events AS (
    SELECT
        ue.artist_id AS artist_id,
        strftime('%H', datetime(ue.created_at / 1000, 'unixepoch')) AS hour_of_day,
        COUNT(DISTINCT ue.user_id) AS number_of_users,
        COUNT(CASE WHEN ue.event_type = 'play_track' THEN 1 END) AS play_track_count,
        COUNT(CASE WHEN ue.event_type = 'share_track' THEN 1 END) AS share_track_count,
        COUNT(CASE WHEN ue.event_type = 'add_track_to_playlist' THEN 1 END) AS add_track_to_playlist_count,
        COUNT(CASE WHEN ue.event_type = 'like_track' THEN 1 END) AS like_track_count
    FROM user_events ue
    JOIN users u ON ue.user_id = u.id
    WHERE ue.event_type IN ('play_track', 'share_track', 'add_track_to_playlist', 'like_track')
    GROUP BY ue.artist_id, hour_of_day
)
SELECT
    he.artist_id,
    a.name AS artist_name,
    he.hour_of_day,
    he.number_of_users,
    he.play_track_count,
    he.share_track_count,
    he.add_track_to_playlist_count,
    he.like_track_count,
    (
        he.play_track_count * {play_track} +
        he.share_track_count * {share_track} +
        he.add_track_to_playlist_count * {add_track_to_playlist} +
        he.like_track_count * {like_track}
    ) AS engagement_score
FROM hourly_events he
JOIN artists a ON he.artist_id = a.id
ORDER BY engagement_score DESC, he.hour_of_day ASC
"""


def hourly_engagement_sql(weights: EventWeights = DEFAULT_WEIGHTS) -> str:
    # int() keeps anything but numeric literals out of the SQL text.
    literals = {event: int(weight) for event, weight in weights.as_dict().items()}
    return _HOURLY_ENGAGEMENT_TEMPLATE.format(**literals)
