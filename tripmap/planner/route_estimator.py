"""Route estimation with a straight-line fallback.

Flight never calls a router. Car and bike ask the road router and fall back
to the raw stop coordinates with proxy distance and a fixed speed whenever
the router fails or answers with something unusable.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from tripmap.adapters.tool_factory import get_route_tool
from tripmap.domain.constants import (
    FALLBACK_SPEED_KMH,
    FLIGHT_SPEED_KMH,
    ROUTED_BIKE_SPEED_KMH,
    ROUTING_PROFILE,
)
from tripmap.domain.enums import RouteSource, TravelMode
from tripmap.domain.exceptions import RoutePreconditionError
from tripmap.domain.models import Place, RouteResult, Summary
from tripmap.planner.distance import format_one_decimal, path_proxy_distance
from tripmap.security.redact import redact_sensitive
from tripmap.tools.interfaces import RoadRoute, RoadRouteInput, RouteTool

_MAX_DIAGNOSTIC_EVENTS = 50
_LOGGER = logging.getLogger("tripmap.routing")


def _summary(distance_km: float, duration_hours: float) -> Summary:
    return Summary(
        distance_km=format_one_decimal(distance_km),
        duration_hours=format_one_decimal(duration_hours),
    )


def _straight_line(places: Sequence[Place], distance_km: float, speed_kmh: float, source: RouteSource) -> RouteResult:
    return RouteResult(
        coordinates=tuple(p.coordinate for p in places),
        summary=_summary(distance_km, distance_km / speed_kmh),
        source=source,
    )


class RouteEstimator:
    def __init__(self, tool: RouteTool | None = None) -> None:
        self._tool = tool
        self._fallback_count = 0
        self._diagnostic_events: list[dict[str, Any]] = []

    def _route_tool(self) -> RouteTool:
        if self._tool is None:
            self._tool = get_route_tool()
        return self._tool

    def _record_fallback(self, *, mode: TravelMode, stops: int, error: Exception) -> None:
        self._fallback_count += 1
        self._diagnostic_events.append(
            {
                "routing_source": RouteSource.FALLBACK.value,
                "mode": mode.value,
                "stops": stops,
                "error_type": type(error).__name__,
                "error_message": redact_sensitive(str(error)),
            }
        )
        if len(self._diagnostic_events) > _MAX_DIAGNOSTIC_EVENTS:
            self._diagnostic_events = self._diagnostic_events[-_MAX_DIAGNOSTIC_EVENTS:]
        _LOGGER.warning(
            "routing fallback to straight line: mode=%s stops=%d error=%s",
            mode.value,
            stops,
            type(error).__name__,
        )

    async def estimate(self, places: Sequence[Place], mode: TravelMode | str) -> RouteResult:
        if len(places) < 2:
            raise RoutePreconditionError("Need >=2 points to route")
        mode = TravelMode(mode)
        proxy_km = path_proxy_distance(places)

        if mode is TravelMode.FLIGHT:
            return _straight_line(places, proxy_km, FLIGHT_SPEED_KMH, RouteSource.DIRECT)

        try:
            road = await self._route_tool().route(
                RoadRouteInput(
                    coordinates=[p.coordinate for p in places],
                    profile=ROUTING_PROFILE[mode],
                )
            )
            return self._from_road_route(road, mode)
        except Exception as exc:
            self._record_fallback(mode=mode, stops=len(places), error=exc)
            return _straight_line(places, proxy_km, FALLBACK_SPEED_KMH[mode], RouteSource.FALLBACK)

    @staticmethod
    def _from_road_route(road: RoadRoute, mode: TravelMode) -> RouteResult:
        distance_km = (road.distance_meters or 0.0) / 1000
        duration_hours = (road.duration_seconds or 0.0) / 3600
        if mode is TravelMode.BIKE:
            # The router's distance is kept; its cycling duration is not.
            duration_hours = distance_km / ROUTED_BIKE_SPEED_KMH
        return RouteResult(
            coordinates=tuple(road.coordinates),
            summary=_summary(distance_km, duration_hours),
            source=RouteSource.OSRM,
        )

    def get_fallback_count(self) -> int:
        return self._fallback_count

    def get_diagnostics(self) -> dict[str, Any]:
        return {
            "routing_source": RouteSource.FALLBACK.value if self._fallback_count else RouteSource.OSRM.value,
            "fallback_count": self._fallback_count,
            "events": list(self._diagnostic_events),
        }
