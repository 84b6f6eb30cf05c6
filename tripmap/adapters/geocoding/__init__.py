"""Geocoding adapters."""

from tripmap.adapters.geocoding import mock as mock_geocoding
from tripmap.adapters.geocoding import real as real_geocoding

__all__ = ["mock_geocoding", "real_geocoding"]
