from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd


DATA_DIR = Path(__file__).resolve().parents[1]
DATABASE_PATH = Path(os.getenv("DASHBOARD_DB_PATH", str(DATA_DIR / "dashboard.db")))
LOG_REPORT_ROWS = os.getenv("DASHBOARD_LOG_ROWS", "0") == "1"

# Timestamps are epoch milliseconds throughout.
SCHEMA_TABLES = {
    "artists": """
        CREATE TABLE IF NOT EXISTS artists (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL
        )
    """,
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY,
            timezone TEXT NOT NULL DEFAULT 'UTC'
        )
    """,
    "sessions": """
        CREATE TABLE IF NOT EXISTS sessions (
            id INTEGER PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id)
        )
    """,
    "visits": """
        CREATE TABLE IF NOT EXISTS visits (
            artist_id INTEGER NOT NULL REFERENCES artists(id),
            session_id INTEGER NOT NULL REFERENCES sessions(id),
            start_time INTEGER NOT NULL,
            end_time INTEGER NOT NULL
        )
    """,
    "user_events": """
        CREATE TABLE IF NOT EXISTS user_events (
            user_id INTEGER NOT NULL REFERENCES users(id),
            artist_id INTEGER NOT NULL REFERENCES artists(id),
            event_type TEXT NOT NULL,
            created_at INTEGER NOT NULL
        )
    """,
}


def connect(path: Optional[Path | str] = None, *, read_only: bool = False) -> sqlite3.Connection:
    """Open the embedded dashboard database.

    Read-only connections never create the file; a missing database raises
    ``sqlite3.OperationalError``.
    """
    target = Path(path) if path is not None else DATABASE_PATH
    if read_only:
        return sqlite3.connect(f"{target.resolve().as_uri()}?mode=ro", uri=True, check_same_thread=False)
    return sqlite3.connect(str(target), check_same_thread=False)


def init_schema(conn: sqlite3.Connection) -> None:
    with conn:
        for ddl in SCHEMA_TABLES.values():
            conn.execute(ddl)


def run_query(conn: sqlite3.Connection, sql: str) -> pd.DataFrame:
    return pd.read_sql_query(sql, conn)


def to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    return df.to_dict(orient="records")


def table_counts(conn: sqlite3.Connection) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for table in SCHEMA_TABLES:
        row = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
        counts[table] = int(row[0]) if row else 0
    return counts
