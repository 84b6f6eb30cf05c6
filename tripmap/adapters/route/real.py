"""Real route adapter backed by the OSRM route service.

Docs: https://project-osrm.org/docs/v5.24.0/api/#route-service
The public demo server needs no key; point OSRM_BASE_URL at a private
instance for production traffic.
"""

from __future__ import annotations

from typing import Any

from tripmap.config.settings import osrm_base_url
from tripmap.domain.models import LatLon
from tripmap.infrastructure.cache import make_cache_key, route_cache
from tripmap.security.http_client import SecureHttpClient
from tripmap.tools.interfaces import RoadRoute, RoadRouteInput, ToolError

_SUPPORTED_PROFILES = {"driving", "cycling"}

_http = SecureHttpClient(tool_name="real_route")


def _format_coordinates(coordinates: list[LatLon]) -> str:
    """OSRM path format: lon,lat;lon,lat (longitude first)."""
    return ";".join(f"{lon},{lat}" for lat, lon in coordinates)


def _number_or_none(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_route(data: Any) -> RoadRoute:
    """Take the first route; raise ToolError when it or its geometry is missing."""
    routes = data.get("routes") if isinstance(data, dict) else None
    if not isinstance(routes, list) or not routes:
        raise ToolError("real_route", "OSRM returned no routes")

    route = routes[0]
    geometry = route.get("geometry") if isinstance(route, dict) else None
    if not isinstance(geometry, dict):
        raise ToolError("real_route", "OSRM route has no geometry")
    raw_coords = geometry.get("coordinates")
    if not isinstance(raw_coords, list):
        raise ToolError("real_route", "OSRM geometry coordinates are not a list")

    try:
        coordinates = [(float(pair[1]), float(pair[0])) for pair in raw_coords]
    except (TypeError, ValueError, IndexError):
        raise ToolError("real_route", "OSRM geometry has malformed coordinate pairs") from None

    return RoadRoute(
        coordinates=coordinates,
        duration_seconds=_number_or_none(route.get("duration")),
        distance_meters=_number_or_none(route.get("distance")),
    )


async def route(params: RoadRouteInput) -> RoadRoute:
    """
    Query OSRM for a road route through every stop in order.
    Cached for 30 minutes per (rounded stops, profile).
    """
    if params.profile not in _SUPPORTED_PROFILES:
        raise ToolError("real_route", f"Unsupported routing profile: {params.profile}")
    if len(params.coordinates) < 2:
        raise ToolError("real_route", "at least two coordinates are required")

    cache_key = make_cache_key(
        "route",
        [(round(lat, 5), round(lon, 5)) for lat, lon in params.coordinates],
        params.profile,
    )
    cached = route_cache.get(cache_key)
    if cached is not None:
        return cached

    url = f"{osrm_base_url()}/route/v1/{params.profile}/{_format_coordinates(params.coordinates)}"
    data = await _http.get(url, params={"overview": "full", "geometries": "geojson"})

    if isinstance(data, dict) and data.get("code") not in (None, "Ok"):
        raise ToolError("real_route", f"OSRM returned error: {data.get('code')} {data.get('message', '')}".strip())

    result = parse_route(data)
    route_cache.set(cache_key, result)
    return result
