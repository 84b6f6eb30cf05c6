"""Domain constants shared by deterministic logic."""

from tripmap.domain.enums import TravelMode

# Linear degree-to-kilometre factor of the proxy distance.
KM_PER_DEGREE = 111.0

FLIGHT_SPEED_KMH = 800.0
ROUTED_BIKE_SPEED_KMH = 30.0

FALLBACK_SPEED_KMH = {
    TravelMode.CAR: 60.0,
    TravelMode.BIKE: 20.0,
}

ROUTING_PROFILE = {
    TravelMode.CAR: "driving",
    TravelMode.BIKE: "cycling",
}

# Animation tick per mode, in seconds.
TICK_SECONDS = {
    "flight": 0.05,
    "car": 0.15,
    "bike": 0.3,
}
DEFAULT_TICK_SECONDS = 0.5

MARKER_ICONS = {
    "car": "car",
    "bike": "bike",
    "flight": "flight",
}
DEFAULT_MARKER_ICON = "walk"

POLYLINE_COLORS = {
    "flight": "#FF0000",
}
DEFAULT_POLYLINE_COLOR = "#2563EB"

GEOCODE_LIMIT = 1
SUGGEST_LIMIT = 6
SUGGEST_MIN_CHARS = 2
SUGGEST_DEBOUNCE_SECONDS = 0.3

LODGING_CATEGORY = "accommodation.hotel"
LODGING_RADIUS_METERS = 5000
LODGING_LIMIT = 10
LODGING_DEFAULT_NAME = "Unnamed Hotel"

FORECAST_MAX_DAYS = 5
WEATHER_UNITS = "metric"

DEFAULT_CENTER = (20.5937, 78.9629)
DEFAULT_ZOOM = 5
DESTINATION_ZOOM = 8
LODGING_ZOOM = 15
FIT_BOUNDS_PADDING = 40
