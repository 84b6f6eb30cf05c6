"""Real places adapter backed by the Geoapify Places API.

Environment: GEOAPIFY_API_KEY
Docs: https://apidocs.geoapify.com/docs/places/
"""

from __future__ import annotations

from typing import Any, Optional

from tripmap.config.settings import geoapify_base_url
from tripmap.domain.constants import LODGING_DEFAULT_NAME
from tripmap.domain.models import PointOfInterest
from tripmap.infrastructure.cache import make_cache_key, places_cache
from tripmap.security.http_client import SecureHttpClient
from tripmap.security.key_manager import get_key_manager
from tripmap.tools.interfaces import PlacesSearchInput, ToolError


def _get_api_key() -> str:
    key = get_key_manager().get_geoapify_key(required=False)
    if not key:
        raise ToolError("real_places", "GEOAPIFY_API_KEY is not configured")
    return key


_http = SecureHttpClient(tool_name="real_places")


def _safe_str(val: object, default: str = "") -> str:
    if isinstance(val, str):
        return val
    if val is None:
        return default
    return str(val)


def feature_to_poi(feature: Any) -> Optional[PointOfInterest]:
    """Convert one GeoJSON feature; None when it has no usable coordinates."""
    if not isinstance(feature, dict):
        return None
    geometry = feature.get("geometry") or {}
    coords = geometry.get("coordinates") if isinstance(geometry, dict) else None
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None
    lon, lat = coords[0], coords[1]
    if lat is None or lon is None:
        return None

    properties = feature.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    poi_id = (
        _safe_str(properties.get("place_id"))
        or _safe_str(properties.get("osm_id"))
        or f"{lat},{lon}"
    )
    try:
        return PointOfInterest(
            id=poi_id,
            name=_safe_str(properties.get("name")) or LODGING_DEFAULT_NAME,
            address=_safe_str(properties.get("address_line2")) or _safe_str(properties.get("formatted")),
            lat=float(lat),
            lon=float(lon),
        )
    except (TypeError, ValueError):
        return None


async def search_places(params: PlacesSearchInput) -> list[PointOfInterest]:
    """
    Category search inside a circle around (lat, lon).
    Cached for 10 minutes per rounded centre, category and radius.
    """
    cache_key = make_cache_key(
        "places", round(params.lat, 4), round(params.lon, 4), params.category, params.radius_meters, params.limit
    )
    cached = places_cache.get(cache_key)
    if cached is not None:
        return cached

    data = await _http.get(
        f"{geoapify_base_url()}/v2/places",
        params={
            "categories": params.category,
            "filter": f"circle:{params.lon},{params.lat},{params.radius_meters}",
            "limit": params.limit,
            "apiKey": _get_api_key(),
        },
    )

    features = data.get("features") if isinstance(data, dict) else None
    if not isinstance(features, list):
        features = []

    results: list[PointOfInterest] = []
    for feature in features:
        poi = feature_to_poi(feature)
        if poi is None:
            continue
        results.append(poi)
        if len(results) >= params.limit:
            break

    places_cache.set(cache_key, results)
    return results
