"""Provider selection by configured credentials and routing mode."""

from __future__ import annotations

from tripmap.adapters import tool_factory
from tripmap.config.settings import resolve_provider_snapshot
from tripmap.security.key_manager import get_key_manager


def _reload_key_cache(*names: str) -> None:
    km = get_key_manager()
    for name in names:
        km.reload(name)


def test_offline_defaults_without_credentials(monkeypatch):
    monkeypatch.setenv("ROUTING_PROVIDER", "offline")

    assert tool_factory.get_geocoding_tool().__name__.endswith("geocoding.mock")
    assert tool_factory.get_places_tool().__name__.endswith("places.mock")
    assert tool_factory.get_route_tool().__name__.endswith("route.mock")
    assert tool_factory.get_weather_tool() is None


def test_real_adapters_with_credentials(monkeypatch):
    monkeypatch.setenv("GEOAPIFY_API_KEY", "geo-key-12345678")
    monkeypatch.setenv("OPENWEATHER_API_KEY", "owm-key-12345678")
    _reload_key_cache("GEOAPIFY_API_KEY", "OPENWEATHER_API_KEY")

    assert tool_factory.get_geocoding_tool().__name__.endswith("geocoding.real")
    assert tool_factory.get_places_tool().__name__.endswith("places.real")
    assert tool_factory.get_route_tool().__name__.endswith("route.real")
    assert tool_factory.get_weather_tool().__name__.endswith("weather.real")


def test_unknown_routing_provider_falls_back_to_osrm(monkeypatch):
    monkeypatch.setenv("ROUTING_PROVIDER", "valhalla")
    assert resolve_provider_snapshot().route_provider == "osrm"
    assert tool_factory.get_route_tool().__name__.endswith("route.real")


def test_provider_snapshot_matches_selected_tools(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "owm-key-12345678")
    monkeypatch.setenv("ROUTING_PROVIDER", "offline")
    monkeypatch.setenv("ENABLE_TOOL_FAULT_INJECTION", "true")
    _reload_key_cache("OPENWEATHER_API_KEY")

    snapshot = resolve_provider_snapshot()

    assert snapshot.model_dump() == {
        "geocoding_provider": "mock",
        "places_provider": "mock",
        "route_provider": "offline",
        "weather_provider": "openweather",
        "fault_injection": True,
    }
    assert tool_factory.get_weather_tool() is not None


def test_blank_credential_counts_as_missing(monkeypatch):
    monkeypatch.setenv("GEOAPIFY_API_KEY", "   ")
    _reload_key_cache("GEOAPIFY_API_KEY")

    assert resolve_provider_snapshot().geocoding_provider == "mock"
    assert tool_factory.get_geocoding_tool().__name__.endswith("geocoding.mock")
