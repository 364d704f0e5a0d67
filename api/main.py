from __future__ import annotations

import logging
import math
import sqlite3
from typing import Iterator

import numpy as np
import pandas as pd
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import DebugResponse, HourlyEngagementResponse, VisitDurationResponse
from core.data import connect
from core.metrics_debug import compute_debug
from core.metrics_engagement import hourly_engagement_chart, load_hourly_engagement
from core.metrics_visits import load_visit_duration, visit_duration_chart


app = FastAPI(title="Artist Engagement Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

PAGE_LOADERS = {
    "task-1": load_visit_duration,
    "task-2": load_hourly_engagement,
}
PAGE_CHARTS = {
    "task-1": visit_duration_chart,
    "task-2": hourly_engagement_chart,
}


def get_db() -> Iterator[sqlite3.Connection]:
    conn = connect(read_only=True)
    try:
        yield conn
    finally:
        conn.close()


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(route: str, exc: Exception) -> JSONResponse:
    logger.exception("%s failed", route)
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.exception_handler(sqlite3.Error)
async def store_error(request: Request, exc: sqlite3.Error) -> JSONResponse:
    # Raised while opening the request connection, before any route body runs.
    return _error(request.url.path, exc)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/task-1", response_model=VisitDurationResponse)
def visit_duration(db: sqlite3.Connection = Depends(get_db)):
    try:
        return _json(load_visit_duration(db))
    except Exception as exc:
        return _error("visit_duration", exc)


@app.get("/task-2", response_model=HourlyEngagementResponse)
def hourly_engagement(db: sqlite3.Connection = Depends(get_db)):
    try:
        return _json(load_hourly_engagement(db))
    except Exception as exc:
        return _error("hourly_engagement", exc)


@app.get("/charts/{page}")
def chart(page: str, db: sqlite3.Connection = Depends(get_db)):
    if page not in PAGE_CHARTS:
        raise HTTPException(status_code=404, detail=f"Unknown page: {page}")
    try:
        rows = PAGE_LOADERS[page](db)["data"]
        return _json({"page": page, "spec": PAGE_CHARTS[page](rows)})
    except Exception as exc:
        return _error("chart", exc)


@app.get("/debug", response_model=DebugResponse)
def debug(db: sqlite3.Connection = Depends(get_db)):
    try:
        return _json(compute_debug(db))
    except Exception as exc:
        return _error("debug", exc)


@app.get("/export/{page}")
def export_page(page: str, db: sqlite3.Connection = Depends(get_db)):
    loader = PAGE_LOADERS.get(page)
    try:
        export_df = pd.DataFrame(loader(db)["data"]) if loader is not None else pd.DataFrame()
    except Exception as exc:
        return _error("export_page", exc)
    filename = f"{page}.csv"
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
