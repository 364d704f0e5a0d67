from __future__ import annotations

import sqlite3

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_db
from core.data import connect, init_schema

# 2024-01-01T00:00:00Z
BASE_MS = 1_704_067_200_000
HOUR_MS = 3_600_000


def at_hour(hour: int, minute: int = 0) -> int:
    return BASE_MS + hour * HOUR_MS + minute * 60_000


@pytest.fixture
def db(tmp_path) -> sqlite3.Connection:
    conn = connect(tmp_path / "dashboard.db")
    init_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def seeded_db(db):
    with db:
        db.executemany("INSERT INTO artists (id, name) VALUES (?, ?)", [(1, "Alpha"), (2, "Beta"), (3, "Gamma")])
        db.executemany(
            "INSERT INTO users (id, timezone) VALUES (?, ?)",
            [(10, "UTC"), (11, "America/New_York"), (12, "Asia/Tokyo")],
        )
        db.executemany("INSERT INTO sessions (id, user_id) VALUES (?, ?)", [(100, 10), (101, 10), (102, 11)])
        db.executemany(
            "INSERT INTO visits (artist_id, session_id, start_time, end_time) VALUES (?, ?, ?, ?)",
            [
                (1, 100, 0, 1000),
                (1, 101, 2000, 2500),
                (2, 102, 0, 5000),
            ],
        )
        db.executemany(
            "INSERT INTO user_events (user_id, artist_id, event_type, created_at) VALUES (?, ?, ?, ?)",
            [
                (10, 1, "play_track", at_hour(9)),
                (11, 1, "share_track", at_hour(9, 30)),
                (10, 1, "like_track", at_hour(14)),
                (12, 2, "play_track", at_hour(3)),
                (12, 2, "skip_track", at_hour(3, 5)),
                (11, 2, "add_track_to_playlist", at_hour(21)),
                (10, 2, "like_track", at_hour(5)),
            ],
        )
    return db


@pytest.fixture
def client(seeded_db):
    def _override():
        yield seeded_db

    app.dependency_overrides[get_db] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
