"""Map view hints derived from trip state."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel

from tripmap.domain.constants import (
    DEFAULT_CENTER,
    DEFAULT_MARKER_ICON,
    DEFAULT_POLYLINE_COLOR,
    DEFAULT_ZOOM,
    DESTINATION_ZOOM,
    FIT_BOUNDS_PADDING,
    LODGING_ZOOM,
    MARKER_ICONS,
    POLYLINE_COLORS,
)
from tripmap.domain.models import LatLon, PointOfInterest, TripState


class Bounds(BaseModel):
    south: float
    west: float
    north: float
    east: float
    padding: int = FIT_BOUNDS_PADDING


class MapView(BaseModel):
    center: LatLon
    zoom: int


def fit_bounds(points: Iterable[LatLon]) -> Optional[Bounds]:
    pts = list(points)
    if not pts:
        return None
    lats = [lat for lat, _ in pts]
    lons = [lon for _, lon in pts]
    return Bounds(south=min(lats), west=min(lons), north=max(lats), east=max(lons))


def trip_bounds(state: TripState) -> Optional[Bounds]:
    """Route polyline plus origin and destination markers."""
    points: list[LatLon] = list(state.route.coordinates) if state.route else []
    if state.origin is not None:
        points.append(state.origin.coordinate)
    if state.destination is not None:
        points.append(state.destination.coordinate)
    return fit_bounds(points)


def initial_view(state: TripState) -> MapView:
    if state.destination is not None:
        return MapView(center=state.destination.coordinate, zoom=DESTINATION_ZOOM)
    return MapView(center=DEFAULT_CENTER, zoom=DEFAULT_ZOOM)


def lodging_view(poi: PointOfInterest) -> MapView:
    return MapView(center=(poi.lat, poi.lon), zoom=LODGING_ZOOM)


def marker_icon(mode: str) -> str:
    return MARKER_ICONS.get(str(getattr(mode, "value", mode)), DEFAULT_MARKER_ICON)


def polyline_color(mode: str) -> str:
    return POLYLINE_COLORS.get(str(getattr(mode, "value", mode)), DEFAULT_POLYLINE_COLOR)
