"""Domain layer exports."""

from tripmap.domain.enums import RouteSource, TravelMode
from tripmap.domain.exceptions import (
    DomainError,
    PlaceNotFoundError,
    PlanError,
    PlanPreconditionError,
    RoutePreconditionError,
)
from tripmap.domain.models import (
    ForecastDay,
    Place,
    PointOfInterest,
    RouteResult,
    Summary,
    TripState,
    Waypoint,
    WeatherSnapshot,
)

__all__ = [
    "TravelMode",
    "RouteSource",
    "DomainError",
    "PlanError",
    "PlaceNotFoundError",
    "PlanPreconditionError",
    "RoutePreconditionError",
    "Place",
    "Waypoint",
    "Summary",
    "RouteResult",
    "PointOfInterest",
    "WeatherSnapshot",
    "ForecastDay",
    "TripState",
]
