"""Route estimation: flight, routed car/bike and the straight-line fallback."""

from __future__ import annotations

import asyncio
import math

import pytest

from tripmap.adapters.route.real import parse_route
from tripmap.domain.enums import RouteSource, TravelMode
from tripmap.domain.exceptions import RoutePreconditionError
from tripmap.domain.models import Place
from tripmap.planner.distance import format_one_decimal
from tripmap.planner.route_estimator import RouteEstimator
from tripmap.shared.exceptions import ToolError
from tripmap.tools.interfaces import RoadRoute

A = Place(lat=0.0, lon=0.0, display="A")
B = Place(lat=1.0, lon=1.0, display="B")


class _OkRouteTool:
    def __init__(self, road: RoadRoute) -> None:
        self.road = road
        self.calls = []

    async def route(self, params):
        self.calls.append(params)
        return self.road


class _FailRouteTool:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or ToolError("real_route", "connection refused")
        self.calls = 0

    async def route(self, _params):
        self.calls += 1
        raise self.error


class _RawRouteTool:
    """Feeds a raw OSRM body through the real parser."""

    def __init__(self, body) -> None:
        self.body = body

    async def route(self, _params):
        return parse_route(self.body)


def _estimate(tool, places, mode):
    return asyncio.run(RouteEstimator(tool=tool).estimate(places, mode))


def test_flight_uses_proxy_distance_and_never_calls_router():
    tool = _FailRouteTool()
    p1, p2 = Place(lat=0, lon=0), Place(lat=3, lon=4)
    result = _estimate(tool, [p1, p2], TravelMode.FLIGHT)

    assert tool.calls == 0
    assert result.source == RouteSource.DIRECT
    assert result.coordinates == ((0.0, 0.0), (3.0, 4.0))
    assert result.summary.distance_km == "555.0"
    assert result.summary.duration_hours == format_one_decimal(555 / 800)


def test_car_uses_router_geometry_distance_and_duration():
    road = RoadRoute(coordinates=[(0.0, 0.0), (0.5, 0.4), (1.0, 1.0)], duration_seconds=5400, distance_meters=120500)
    tool = _OkRouteTool(road)
    result = _estimate(tool, [A, B], "car")

    assert tool.calls[0].profile == "driving"
    assert tool.calls[0].coordinates == [(0.0, 0.0), (1.0, 1.0)]
    assert result.source == RouteSource.OSRM
    assert result.coordinates == ((0.0, 0.0), (0.5, 0.4), (1.0, 1.0))
    assert result.summary.distance_km == "120.5"
    assert result.summary.duration_hours == "1.5"


def test_bike_duration_is_distance_over_30_regardless_of_router_duration():
    road = RoadRoute(coordinates=[(0.0, 0.0), (1.0, 1.0)], duration_seconds=600, distance_meters=45000)
    tool = _OkRouteTool(road)
    result = _estimate(tool, [A, B], TravelMode.BIKE)

    assert tool.calls[0].profile == "cycling"
    assert result.summary.distance_km == "45.0"
    assert result.summary.duration_hours == "1.5"


def test_car_fallback_when_router_is_down():
    result = _estimate(_FailRouteTool(), [A, B], TravelMode.CAR)

    assert result.source == RouteSource.FALLBACK
    assert result.coordinates == ((0.0, 0.0), (1.0, 1.0))
    assert result.summary.distance_km == "157.0"
    assert result.summary.duration_hours == "2.6"


def test_bike_fallback_uses_20_kmh():
    result = _estimate(_FailRouteTool(), [A, B], TravelMode.BIKE)
    assert result.summary.duration_hours == format_one_decimal(math.sqrt(2) * 111 / 20)


def test_fallback_covers_every_waypoint_in_order():
    places = [Place(lat=0, lon=0), Place(lat=0, lon=1), Place(lat=1, lon=1)]
    result = _estimate(_FailRouteTool(RuntimeError("boom")), places, TravelMode.CAR)
    assert result.coordinates == ((0.0, 0.0), (0.0, 1.0), (1.0, 1.0))
    assert result.summary.distance_km == "222.0"
    assert result.summary.duration_hours == "3.7"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"routes": []},
        {"routes": None},
        {"routes": [{"distance": 1000, "duration": 60}]},
        {"routes": [{"geometry": None}]},
        {"routes": [{"geometry": {"coordinates": "not-a-list"}}]},
        {"routes": [{"geometry": {"type": "LineString"}}]},
        ["unexpected"],
    ],
)
def test_malformed_router_answers_trigger_fallback(body):
    result = _estimate(_RawRouteTool(body), [A, B], TravelMode.CAR)
    assert result.source == RouteSource.FALLBACK
    assert result.summary.distance_km == "157.0"


def test_non_numeric_router_fields_count_as_zero():
    body = {"routes": [{"geometry": {"coordinates": [[0, 0], [1, 1]]}, "distance": "far", "duration": None}]}
    result = _estimate(_RawRouteTool(body), [A, B], TravelMode.CAR)
    assert result.source == RouteSource.OSRM
    assert result.summary.distance_km == "0.0"
    assert result.summary.duration_hours == "0.0"


def test_fewer_than_two_places_is_a_precondition_error():
    with pytest.raises(RoutePreconditionError, match="Need >=2 points to route"):
        _estimate(_FailRouteTool(), [A], TravelMode.FLIGHT)


def test_fallback_diagnostics_are_recorded():
    estimator = RouteEstimator(tool=_FailRouteTool())
    asyncio.run(estimator.estimate([A, B], TravelMode.CAR))
    asyncio.run(estimator.estimate([A, B], TravelMode.BIKE))

    diagnostics = estimator.get_diagnostics()
    assert estimator.get_fallback_count() == 2
    assert diagnostics["routing_source"] == "fallback_straight_line"
    assert [e["mode"] for e in diagnostics["events"]] == ["car", "bike"]
    assert diagnostics["events"][0]["error_type"] == "ToolError"


def test_blocked_route_tool_falls_back(monkeypatch):
    monkeypatch.setenv("TOOL_ALLOWLIST", "geocoding,places")
    result = asyncio.run(RouteEstimator().estimate([A, B], TravelMode.CAR))
    assert result.source == RouteSource.FALLBACK
