"""Weather adapters."""

from tripmap.adapters.weather import real as real_weather

__all__ = ["real_weather"]
