"""Concrete tool selection and wiring."""

from __future__ import annotations

import logging
import os

from tripmap.adapters.fault_injection import wrap_tool_with_fault_injection
from tripmap.adapters.geocoding import mock as mock_geocoding
from tripmap.adapters.places import mock as mock_places
from tripmap.adapters.route import mock as offline_route
from tripmap.config.settings import resolve_geocoding_provider, resolve_route_provider, resolve_weather_provider
from tripmap.shared.exceptions import ToolError

_logger = logging.getLogger("tripmap.tools")
_DEFAULT_ALLOWLIST = {"geocoding", "route", "places", "weather"}


def _tool_allowlist() -> set[str]:
    raw = os.getenv("TOOL_ALLOWLIST", "")
    if not raw.strip():
        return set(_DEFAULT_ALLOWLIST)
    values = {item.strip().lower() for item in raw.split(",") if item.strip()}
    return values or set(_DEFAULT_ALLOWLIST)


def _ensure_tool_allowed(tool_name: str) -> None:
    if tool_name not in _tool_allowlist():
        raise ToolError(tool_name, f"Tool blocked by TOOL_ALLOWLIST: {tool_name}")


def get_geocoding_tool():
    _ensure_tool_allowed("geocoding")
    if resolve_geocoding_provider() == "geoapify":
        from tripmap.adapters.geocoding import real as real_geocoding

        return wrap_tool_with_fault_injection("geocoding", real_geocoding)
    _logger.debug("GEOAPIFY_API_KEY not set, using offline gazetteer")
    return wrap_tool_with_fault_injection("geocoding", mock_geocoding)


def get_route_tool():
    _ensure_tool_allowed("route")
    if resolve_route_provider() == "offline":
        return wrap_tool_with_fault_injection("route", offline_route)
    from tripmap.adapters.route import real as real_route

    return wrap_tool_with_fault_injection("route", real_route)


def get_places_tool():
    _ensure_tool_allowed("places")
    if resolve_geocoding_provider() == "geoapify":
        from tripmap.adapters.places import real as real_places

        return wrap_tool_with_fault_injection("places", real_places)
    return wrap_tool_with_fault_injection("places", mock_places)


def get_weather_tool():
    """Return the weather tool, or None when no weather credential is configured."""
    _ensure_tool_allowed("weather")
    if resolve_weather_provider() == "disabled":
        return None
    from tripmap.adapters.weather import real as real_weather

    return wrap_tool_with_fault_injection("weather", real_weather)


__all__ = [
    "get_geocoding_tool",
    "get_route_tool",
    "get_places_tool",
    "get_weather_tool",
]
