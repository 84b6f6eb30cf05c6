"""Infrastructure services and cross-cutting utilities."""

from tripmap.infrastructure.cache import (
    MemoryCache,
    clear_all_caches,
    geocode_cache,
    make_cache_key,
    places_cache,
    route_cache,
    weather_cache,
)
from tripmap.infrastructure.logging import StructuredLogger, get_logger

__all__ = [
    "MemoryCache",
    "make_cache_key",
    "clear_all_caches",
    "geocode_cache",
    "route_cache",
    "places_cache",
    "weather_cache",
    "StructuredLogger",
    "get_logger",
]
