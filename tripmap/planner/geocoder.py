"""Free text → single best place."""

from __future__ import annotations

import logging
from typing import Optional

from tripmap.adapters.tool_factory import get_geocoding_tool
from tripmap.domain.constants import GEOCODE_LIMIT
from tripmap.domain.models import Place
from tripmap.security.redact import redact_sensitive
from tripmap.tools.interfaces import GeocodingTool

_LOGGER = logging.getLogger("tripmap.geocoder")


class Geocoder:
    def __init__(self, tool: GeocodingTool | None = None) -> None:
        self._tool = tool if tool is not None else get_geocoding_tool()

    async def resolve(self, text: str | None) -> Optional[Place]:
        """Return the best-ranked place, or None. Never raises for lookup failures."""
        query = (text or "").strip()
        if not query:
            return None
        try:
            candidates = await self._tool.search(query, GEOCODE_LIMIT)
        except Exception as exc:
            _LOGGER.warning("geocode failed for %r: %s", query, redact_sensitive(str(exc)))
            return None
        if not candidates:
            _LOGGER.info("geocode returned no results for %r", query)
            return None
        return candidates[0]
