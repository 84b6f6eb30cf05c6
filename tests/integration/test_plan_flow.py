"""End-to-end planning against offline providers, including injected outages."""

from __future__ import annotations

import asyncio

from tripmap.application.orchestrator import TripOrchestrator
from tripmap.domain.enums import RouteSource
from tripmap.planner.distance import format_one_decimal, path_proxy_distance


def test_multi_stop_trip_with_unresolved_waypoint(monkeypatch):
    monkeypatch.setenv("ROUTING_PROVIDER", "offline")
    orch = TripOrchestrator()
    orch.set_origin_text("Delhi")
    orch.add_waypoint("Jaipur")
    orch.add_waypoint("Atlantis")
    orch.set_destination_text("Agra")
    orch.set_mode("bike")

    state = asyncio.run(orch.plan_trip())

    places = state.routed_places()
    assert [p.display.split(",")[0] for p in places] == ["Delhi", "Jaipur", "Agra"]
    assert state.route.source is RouteSource.FALLBACK
    assert state.route.coordinates == tuple(p.coordinate for p in places)
    km = path_proxy_distance(places)
    assert state.route.summary.distance_km == format_one_decimal(km)
    assert state.route.summary.duration_hours == format_one_decimal(km / 20)
    assert orch.route_estimator.get_fallback_count() == 1


def test_injected_route_outage_falls_back(monkeypatch):
    monkeypatch.setenv("ENABLE_TOOL_FAULT_INJECTION", "true")
    monkeypatch.setenv("TOOL_FAULT_INJECTION", "route:unavailable")
    orch = TripOrchestrator()
    orch.set_origin_text("Paris")
    orch.set_destination_text("Berlin")

    state = asyncio.run(orch.plan_trip())

    assert state.error == ""
    assert state.route.source is RouteSource.FALLBACK
    events = orch.route_estimator.get_diagnostics()["events"]
    assert events[0]["error_type"] == "ToolError"
    assert "503" in events[0]["error_message"]


def test_injected_geocoding_outage_reports_origin(monkeypatch):
    monkeypatch.setenv("ENABLE_TOOL_FAULT_INJECTION", "true")
    monkeypatch.setenv("TOOL_FAULT_INJECTION", "geocoding:timeout")
    orch = TripOrchestrator()
    orch.set_origin_text("Paris")
    orch.set_destination_text("Berlin")

    assert asyncio.run(orch.plan_trip()).error == "Origin not found"
