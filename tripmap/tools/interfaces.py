"""Tool abstraction protocols and I/O schemas."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from tripmap.domain.constants import LODGING_CATEGORY, LODGING_LIMIT, LODGING_RADIUS_METERS, WEATHER_UNITS
from tripmap.domain.models import LatLon, Place, PointOfInterest, WeatherSnapshot
from tripmap.shared.exceptions import ToolError


class RoadRouteInput(BaseModel):
    coordinates: list[LatLon] = Field(description="Ordered (lat, lon) stops")
    profile: str = Field(description="driving or cycling")


class RoadRoute(BaseModel):
    coordinates: list[LatLon] = Field(description="Route geometry as (lat, lon)")
    duration_seconds: Optional[float] = None
    distance_meters: Optional[float] = None


class PlacesSearchInput(BaseModel):
    lat: float
    lon: float
    category: str = LODGING_CATEGORY
    radius_meters: int = LODGING_RADIUS_METERS
    limit: int = LODGING_LIMIT


class WeatherInput(BaseModel):
    lat: float
    lon: float
    units: str = WEATHER_UNITS


class ForecastEntry(BaseModel):
    timestamp: str = Field(description="Provider timestamp, 'YYYY-MM-DD HH:MM:SS'")
    temperature_c: Optional[float] = None
    description: str = ""


@runtime_checkable
class GeocodingTool(Protocol):
    async def search(self, text: str, limit: int) -> list[Place]: ...

    async def autocomplete(self, text: str, limit: int) -> list[Place]: ...


@runtime_checkable
class RouteTool(Protocol):
    async def route(self, params: RoadRouteInput) -> RoadRoute: ...


@runtime_checkable
class PlacesTool(Protocol):
    async def search_places(self, params: PlacesSearchInput) -> list[PointOfInterest]: ...


@runtime_checkable
class WeatherTool(Protocol):
    async def current(self, params: WeatherInput) -> WeatherSnapshot: ...

    async def forecast(self, params: WeatherInput) -> list[ForecastEntry]: ...


__all__ = [
    "RoadRouteInput",
    "RoadRoute",
    "PlacesSearchInput",
    "WeatherInput",
    "ForecastEntry",
    "GeocodingTool",
    "RouteTool",
    "PlacesTool",
    "WeatherTool",
    "ToolError",
]
