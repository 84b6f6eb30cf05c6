"""Route adapters."""

from tripmap.adapters.route import mock as offline_route
from tripmap.adapters.route import real as real_route

__all__ = ["offline_route", "real_route"]
