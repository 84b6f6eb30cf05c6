"""Real geocoding adapter backed by the Geoapify geocoding API.

Environment: GEOAPIFY_API_KEY
Docs:
  search:       https://apidocs.geoapify.com/docs/geocoding/forward-geocoding/
  autocomplete: https://apidocs.geoapify.com/docs/geocoding/address-autocomplete/
"""

from __future__ import annotations

from typing import Any, Optional

from tripmap.config.settings import geoapify_base_url
from tripmap.domain.models import Place
from tripmap.infrastructure.cache import geocode_cache, make_cache_key
from tripmap.security.http_client import SecureHttpClient
from tripmap.security.key_manager import get_key_manager
from tripmap.tools.interfaces import ToolError


def _get_api_key() -> str:
    key = get_key_manager().get_geoapify_key(required=False)
    if not key:
        raise ToolError("real_geocoding", "GEOAPIFY_API_KEY is not configured")
    return key


_http = SecureHttpClient(tool_name="real_geocoding")


def feature_to_place(feature: Any) -> Optional[Place]:
    """GeoJSON feature → Place. Geoapify returns coordinates as [lon, lat]."""
    if not isinstance(feature, dict):
        return None
    geometry = feature.get("geometry") or {}
    coords = geometry.get("coordinates") if isinstance(geometry, dict) else None
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None
    lon, lat = coords[0], coords[1]
    if lat is None or lon is None:
        return None
    properties = feature.get("properties") or {}
    display = properties.get("formatted") if isinstance(properties, dict) else ""
    try:
        return Place(lat=float(lat), lon=float(lon), display=display or "", raw_metadata=feature)
    except (TypeError, ValueError):
        return None


def features_to_places(data: Any) -> list[Place]:
    features = data.get("features") if isinstance(data, dict) else None
    if not isinstance(features, list):
        return []
    places: list[Place] = []
    for feature in features:
        place = feature_to_place(feature)
        if place is not None:
            places.append(place)
    return places


async def _lookup(endpoint: str, text: str, limit: int) -> list[Place]:
    cache_key = make_cache_key("geoapify", endpoint, text, limit)
    cached = geocode_cache.get(cache_key)
    if cached is not None:
        return cached

    data = await _http.get(
        f"{geoapify_base_url()}/v1/geocode/{endpoint}",
        params={"text": text, "limit": limit, "apiKey": _get_api_key()},
    )
    places = features_to_places(data)[:limit]
    geocode_cache.set(cache_key, places)
    return places


async def search(text: str, limit: int) -> list[Place]:
    return await _lookup("search", text, limit)


async def autocomplete(text: str, limit: int) -> list[Place]:
    return await _lookup("autocomplete", text, limit)
