"""FastAPI application."""

from __future__ import annotations

import asyncio
import logging
import os
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from tripmap import __version__
from tripmap.api.schemas import GeocodeResponse, HealthResponse, PlanRequest, PlanResponse, SuggestResponse
from tripmap.application.orchestrator import TripOrchestrator
from tripmap.config.settings import plan_timeout_seconds, resolve_provider_snapshot
from tripmap.domain.models import TripState, Waypoint
from tripmap.infrastructure.cache import ALL_CACHES
from tripmap.planner.geocoder import Geocoder
from tripmap.planner.suggester import AutocompleteSuggester
from tripmap.planner.viewport import initial_view, marker_icon, polyline_color, trip_bounds

_api_logger = logging.getLogger("tripmap.api")

load_dotenv()

app = FastAPI(
    title="tripmap",
    version=__version__,
    docs_url="/docs" if os.getenv("ENABLE_DOCS", "false").lower() == "true" else None,
    redoc_url=None,
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding window limit on POST requests (single process, in memory)."""

    def __init__(self, app, max_requests: int = 60, window_seconds: int = 60):
        super().__init__(app)
        self._max = max_requests
        self._window = window_seconds
        self._counters: dict[str, list[float]] = {}

    async def dispatch(self, request: Request, call_next):
        if request.method != "POST":
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        hits = [t for t in self._counters.get(client_ip, []) if now - t < self._window]
        if len(hits) >= self._max:
            return JSONResponse(status_code=429, content={"detail": "Too many requests, try again later"})
        hits.append(now)
        self._counters[client_ip] = hits
        return await call_next(request)


app.add_middleware(
    RateLimitMiddleware,
    max_requests=int(os.getenv("RATE_LIMIT_MAX", "60")),
    window_seconds=int(os.getenv("RATE_LIMIT_WINDOW", "60")),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def _initial_state(req: PlanRequest) -> TripState:
    return TripState(
        origin_text=req.origin.place.display if req.origin.place else req.origin.text,
        origin=req.origin.place,
        destination_text=req.destination.place.display if req.destination.place else req.destination.text,
        destination=req.destination.place,
        waypoints=tuple(
            Waypoint.from_place(wp.place) if wp.place else Waypoint(text=wp.text) for wp in req.waypoints
        ),
        mode=req.mode,
    )


def _to_response(state: TripState) -> PlanResponse:
    return PlanResponse(
        status="error" if state.error else "done",
        message=state.error,
        trip=state,
        bounds=trip_bounds(state),
        view=initial_view(state),
        marker_icon=marker_icon(state.mode),
        polyline_color=polyline_color(state.mode),
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok")


@app.get("/diagnostics")
async def diagnostics():
    return {
        "providers": resolve_provider_snapshot().model_dump(),
        "cache": {name: cache.stats for name, cache in ALL_CACHES.items()},
    }


@app.get("/suggest", response_model=SuggestResponse)
async def suggest(text: str = Query(default="", max_length=300)):
    places = await AutocompleteSuggester(delay=0).suggest(text)
    return SuggestResponse(query=text, suggestions=places)


@app.get("/geocode", response_model=GeocodeResponse)
async def geocode(text: str = Query(default="", max_length=300)):
    return GeocodeResponse(query=text, place=await Geocoder().resolve(text))


@app.post("/plan", response_model=PlanResponse)
async def plan(req: PlanRequest):
    orchestrator = TripOrchestrator(state=_initial_state(req))
    timeout = plan_timeout_seconds()
    try:
        state = await asyncio.wait_for(orchestrator.plan_trip(), timeout=timeout)
    except asyncio.TimeoutError:
        _api_logger.warning("plan timed out after %ss", timeout)
        state = orchestrator.state.model_copy(update={"error": f"Planning timed out ({timeout:.0f}s)"})
    return _to_response(state)
