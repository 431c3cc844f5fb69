from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .axis import compute_ticks
from .calendar_arithmetic import calendar_from_absolute_day, calendar_to_absolute_day
from .layout import TimelineLayout, compute_layout
from .models import (
    AbsoluteDayResponse,
    AxisLabel,
    DateParts,
    FromAbsoluteDayRequest,
    LayoutRequest,
    LayoutResponse,
    PlacedItem,
    ToAbsoluteDayRequest,
)
from .settings import settings
from .timeline_builder import TimelineItem

LOG_LEVEL = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("chronolanes.app")
logger.setLevel(LOG_LEVEL)

ALLOWED_ORIGINS = settings.allowed_origins or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.started_at = datetime.now(timezone.utc)
    app.state.settings = settings
    yield


app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _uptime_seconds() -> float:
    started_at = getattr(app.state, "started_at", None)
    if not started_at:
        return 0.0
    return max(0.0, (datetime.now(timezone.utc) - started_at).total_seconds())


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id
    start_time = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    if settings.enable_request_logging:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", str(uuid4()))
    logger.exception(
        "Unhandled server error",
        extra={"request_id": request_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected internal error occurred.",
            "request_id": request_id,
        },
        headers={"X-Request-ID": request_id},
    )


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "uptime_seconds": round(_uptime_seconds(), 3),
        "version": app.version,
    }


@app.get("/health/live")
async def health_live() -> Dict[str, Any]:
    return {"status": "ok", "uptime_seconds": round(_uptime_seconds(), 3)}


@app.get("/health/ready")
async def health_ready() -> Dict[str, Any]:
    return {"status": "ok", "uptime_seconds": round(_uptime_seconds(), 3)}


def _date_parts(item: TimelineItem, day: int) -> DateParts:
    year, month, day_of_month = calendar_from_absolute_day(day, item.months)
    return DateParts(year=year, month=month, day=day_of_month)


def _axis_months(layout: TimelineLayout):
    # The axis follows a custom calendar only when every item shares it.
    calendars = {item.months for item in layout.items}
    if len(calendars) == 1:
        return next(iter(calendars))
    return None


def _placed_tracks(layout: TimelineLayout) -> List[List[PlacedItem]]:
    return [
        [
            PlacedItem(
                id=item.identity,
                track=position,
                start_day=item.range.start_day,
                end_day=item.range.end_day,
                index_value=item.index_value,
                start=_date_parts(item, item.range.start_day),
                end=_date_parts(item, item.range.end_day),
                conflict=item.identity in layout.conflicts,
            )
            for item in track
        ]
        for position, track in enumerate(layout.tracks)
    ]


@app.post("/api/layout", response_model=LayoutResponse)
async def layout_timeline(request: LayoutRequest) -> LayoutResponse:
    if len(request.records) > settings.max_records:
        raise HTTPException(
            status_code=413,
            detail=f"Too many records (maximum {settings.max_records:,}).",
        )

    config = request.config
    pixels_per_day = config.pixels_per_day or settings.default_pixels_per_day
    layout = compute_layout(request.records, config)

    ticks: List[AxisLabel] = []
    if layout.min_day is not None and layout.max_day is not None:
        ticks = [
            AxisLabel(day=tick.day, label=tick.label)
            for tick in compute_ticks(
                layout.min_day,
                layout.max_day,
                pixels_per_day,
                min_label_px=settings.min_label_px,
                months=_axis_months(layout),
                limit=settings.max_axis_ticks,
            )
        ]

    return LayoutResponse(
        mode=config.mode,
        tracks=_placed_tracks(layout),
        order=[item.identity for item in layout.items],
        conflicts=sorted(layout.conflicts),
        track_count=len(layout.tracks),
        min_day=layout.min_day,
        max_day=layout.max_day,
        total_days=layout.total_days,
        pixels_per_day=pixels_per_day,
        ticks=ticks,
        generated_at=datetime.now(timezone.utc),
    )


@app.post("/api/calendar/to-day", response_model=AbsoluteDayResponse)
async def to_day(request: ToAbsoluteDayRequest) -> AbsoluteDayResponse:
    day = calendar_to_absolute_day(request.year, request.month, request.day, request.months)
    return AbsoluteDayResponse(day=day)


@app.post("/api/calendar/from-day", response_model=DateParts)
async def from_day(request: FromAbsoluteDayRequest) -> DateParts:
    year, month, day = calendar_from_absolute_day(request.day, request.months)
    return DateParts(year=year, month=month, day=day)
