"""Pydantic domain models.

All models are frozen: the orchestrator replaces whole snapshots instead of
mutating them in place.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from tripmap.domain.enums import RouteSource, TravelMode

LatLon = tuple[float, float]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Place(_Frozen):
    lat: float
    lon: float
    display: str = ""
    raw_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def coordinate(self) -> LatLon:
        return (self.lat, self.lon)


class Waypoint(_Frozen):
    """A user-entered stop. `place` is only set when it was produced together with `text`."""

    text: str = ""
    place: Optional[Place] = None

    def with_text(self, text: str) -> "Waypoint":
        return Waypoint(text=text, place=None)

    @classmethod
    def from_place(cls, place: Place) -> "Waypoint":
        return cls(text=place.display or "", place=place)


class Summary(_Frozen):
    distance_km: str = Field(description="Distance in km, one fractional digit")
    duration_hours: str = Field(description="Duration in hours, one fractional digit")


class RouteResult(_Frozen):
    coordinates: tuple[LatLon, ...] = ()
    summary: Summary
    source: RouteSource = RouteSource.DIRECT


class PointOfInterest(_Frozen):
    id: str
    name: str
    address: str = ""
    lat: float
    lon: float


class WeatherSnapshot(_Frozen):
    temperature_c: float
    description: str = ""


class ForecastDay(_Frozen):
    date: str = Field(description="Date in YYYY-MM-DD format")
    temperature_c: int
    description: str = ""


class TripState(_Frozen):
    origin_text: str = ""
    origin: Optional[Place] = None
    destination_text: str = ""
    destination: Optional[Place] = None
    waypoints: tuple[Waypoint, ...] = ()
    mode: TravelMode = TravelMode.CAR
    route: Optional[RouteResult] = None
    points_of_interest: tuple[PointOfInterest, ...] = ()
    weather: Optional[WeatherSnapshot] = None
    forecast: tuple[ForecastDay, ...] = ()
    loading: bool = False
    error: str = ""
    revision: int = 0

    def routed_places(self) -> list[Place]:
        """Origin, resolved waypoints in order, destination. Unresolved stops are skipped."""
        places: list[Place] = []
        if self.origin is not None:
            places.append(self.origin)
        places.extend(wp.place for wp in self.waypoints if wp.place is not None)
        if self.destination is not None:
            places.append(self.destination)
        return places
