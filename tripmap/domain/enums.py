"""Domain enums."""

from enum import Enum


class TravelMode(str, Enum):
    CAR = "car"
    BIKE = "bike"
    FLIGHT = "flight"


class RouteSource(str, Enum):
    DIRECT = "direct"
    OSRM = "osrm"
    FALLBACK = "fallback_straight_line"
