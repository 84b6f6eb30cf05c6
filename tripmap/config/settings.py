"""Runtime provider snapshot helpers."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from tripmap.infrastructure.config import get_env_float, is_enabled
from tripmap.security.key_manager import GEOAPIFY_KEY_NAME, OPENWEATHER_KEY_NAME, get_key_manager

DEFAULT_GEOAPIFY_BASE_URL = "https://api.geoapify.com"
DEFAULT_OSRM_BASE_URL = "https://router.project-osrm.org"
DEFAULT_OPENWEATHER_BASE_URL = "https://api.openweathermap.org"


def _base_url(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip()
    return (value or default).rstrip("/")


def geoapify_base_url() -> str:
    return _base_url("GEOAPIFY_BASE_URL", DEFAULT_GEOAPIFY_BASE_URL)


def osrm_base_url() -> str:
    return _base_url("OSRM_BASE_URL", DEFAULT_OSRM_BASE_URL)


def openweather_base_url() -> str:
    return _base_url("OPENWEATHER_BASE_URL", DEFAULT_OPENWEATHER_BASE_URL)


def resolve_geocoding_provider() -> str:
    return "geoapify" if get_key_manager().has_key(GEOAPIFY_KEY_NAME) else "mock"


def resolve_route_provider() -> str:
    mode = (os.getenv("ROUTING_PROVIDER") or "").strip().lower()
    if mode in {"osrm", "offline"}:
        return mode
    return "osrm"


def resolve_weather_provider() -> str:
    return "openweather" if get_key_manager().has_key(OPENWEATHER_KEY_NAME) else "disabled"


def suggest_debounce_seconds() -> float:
    return max(0.0, get_env_float("SUGGEST_DEBOUNCE_MS", 300.0)) / 1000.0


def suggest_min_chars() -> int:
    return max(1, int(get_env_float("SUGGEST_MIN_CHARS", 2)))


def plan_timeout_seconds() -> float:
    return max(1.0, get_env_float("PLAN_TIMEOUT_SECONDS", 60.0))


class ProviderSnapshot(BaseModel):
    geocoding_provider: str = Field(default="mock")
    places_provider: str = Field(default="mock")
    route_provider: str = Field(default="osrm")
    weather_provider: str = Field(default="disabled")
    fault_injection: bool = Field(default=False)


def resolve_provider_snapshot() -> ProviderSnapshot:
    geocoding = resolve_geocoding_provider()
    return ProviderSnapshot(
        geocoding_provider=geocoding,
        places_provider=geocoding,
        route_provider=resolve_route_provider(),
        weather_provider=resolve_weather_provider(),
        fault_injection=is_enabled("ENABLE_TOOL_FAULT_INJECTION"),
    )


__all__ = [
    "ProviderSnapshot",
    "resolve_provider_snapshot",
    "resolve_geocoding_provider",
    "resolve_route_provider",
    "resolve_weather_provider",
    "geoapify_base_url",
    "osrm_base_url",
    "openweather_base_url",
    "suggest_debounce_seconds",
    "suggest_min_chars",
    "plan_timeout_seconds",
]
