"""API request/response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from tripmap.domain.enums import TravelMode
from tripmap.domain.models import Place, TripState
from tripmap.planner.viewport import Bounds, MapView


class PlaceField(BaseModel):
    text: str = Field(default="", max_length=300, description="Free text typed by the user")
    place: Optional[Place] = Field(default=None, description="Place picked from suggestions")


class PlanRequest(BaseModel):
    origin: PlaceField
    destination: PlaceField
    waypoints: list[PlaceField] = Field(default_factory=list, max_length=20)
    mode: TravelMode = TravelMode.CAR


class PlanResponse(BaseModel):
    status: str = Field(description="done / error")
    message: str = Field(default="")
    trip: TripState
    bounds: Optional[Bounds] = None
    view: MapView
    marker_icon: str
    polyline_color: str


class SuggestResponse(BaseModel):
    query: str
    suggestions: list[Place] = Field(default_factory=list)


class GeocodeResponse(BaseModel):
    query: str
    place: Optional[Place] = None


class HealthResponse(BaseModel):
    status: str = "ok"
