from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel


class EventWeightsModel(BaseModel):
    play_track: int = 1
    like_track: int = 2
    add_track_to_playlist: int = 2
    share_track: int = 3


class ArtistVisitSummary(BaseModel):
    artist_id: int
    artist_name: str
    total_visit_duration: int
    unique_visitor_count: int


class HourlyEngagement(BaseModel):
    artist_id: int
    artist_name: str
    hour_of_day: str
    number_of_users: int
    play_track_count: int
    share_track_count: int
    add_track_to_playlist_count: int
    like_track_count: int
    engagement_score: int


class VisitDurationResponse(BaseModel):
    data: List[ArtistVisitSummary]


class HourlyEngagementResponse(BaseModel):
    data: List[HourlyEngagement]


class VisitDurationDebug(BaseModel):
    artist_name: str
    duration: int
    formatted: str


class DebugResponse(BaseModel):
    row_counts: Dict[str, int]
    weights: EventWeightsModel
    visit_durations: List[VisitDurationDebug]
