"""Lodging near a coordinate."""

from __future__ import annotations

import logging

from tripmap.adapters.tool_factory import get_places_tool
from tripmap.domain.constants import LODGING_CATEGORY, LODGING_LIMIT, LODGING_RADIUS_METERS
from tripmap.domain.models import PointOfInterest
from tripmap.security.redact import redact_sensitive
from tripmap.tools.interfaces import PlacesSearchInput, PlacesTool

_LOGGER = logging.getLogger("tripmap.places")


class PlacesFetcher:
    def __init__(self, tool: PlacesTool | None = None) -> None:
        self._tool = tool

    async def nearby(self, lat: float, lon: float) -> list[PointOfInterest]:
        """Up to 10 lodgings within 5 km. Any failure yields []."""
        try:
            tool = self._tool if self._tool is not None else get_places_tool()
            results = await tool.search_places(
                PlacesSearchInput(
                    lat=lat,
                    lon=lon,
                    category=LODGING_CATEGORY,
                    radius_meters=LODGING_RADIUS_METERS,
                    limit=LODGING_LIMIT,
                )
            )
        except Exception as exc:
            _LOGGER.warning("places lookup failed near (%s, %s): %s", lat, lon, redact_sensitive(str(exc)))
            return []
        return [poi for poi in results if poi.id][:LODGING_LIMIT]
