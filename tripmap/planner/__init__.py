"""Planning services: geocoding, suggestions, routing, lodging and weather."""

from tripmap.planner.distance import format_one_decimal, path_proxy_distance, proxy_distance
from tripmap.planner.geocoder import Geocoder
from tripmap.planner.places import PlacesFetcher
from tripmap.planner.route_estimator import RouteEstimator
from tripmap.planner.suggester import AutocompleteSuggester
from tripmap.planner.weather import WeatherFetcher, collapse_forecast

__all__ = [
    "proxy_distance",
    "path_proxy_distance",
    "format_one_decimal",
    "Geocoder",
    "AutocompleteSuggester",
    "RouteEstimator",
    "PlacesFetcher",
    "WeatherFetcher",
    "collapse_forecast",
]
