"""Debounced autocomplete suggestions.

`schedule()` is the per-keystroke entry point: every call cancels the
pending debounce timer and bumps a generation counter. A lookup delivers
only if no `schedule()` or `cancel()` happened since it was scheduled, so a
slow response can never replace newer input, including a cleared field.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from tripmap.adapters.tool_factory import get_geocoding_tool
from tripmap.config.settings import suggest_debounce_seconds, suggest_min_chars
from tripmap.domain.constants import SUGGEST_LIMIT
from tripmap.domain.models import Place
from tripmap.security.redact import redact_sensitive
from tripmap.tools.interfaces import GeocodingTool

_LOGGER = logging.getLogger("tripmap.suggester")

Deliver = Callable[[list[Place]], None]


class AutocompleteSuggester:
    """One instance per input field."""

    def __init__(
        self,
        tool: GeocodingTool | None = None,
        *,
        delay: float | None = None,
        min_chars: int | None = None,
        limit: int = SUGGEST_LIMIT,
    ) -> None:
        self._tool = tool if tool is not None else get_geocoding_tool()
        self._delay = suggest_debounce_seconds() if delay is None else delay
        self._min_chars = suggest_min_chars() if min_chars is None else min_chars
        self._limit = limit
        self._pending: Optional[asyncio.Task] = None
        self._issued = 0
        self._generation = 0

    @property
    def issued(self) -> int:
        """Number of lookups actually sent to the provider."""
        return self._issued

    async def suggest(self, text: str | None) -> list[Place]:
        """Immediate lookup: at most `limit` places, empty on short input or failure."""
        query = (text or "").strip()
        if len(query) < self._min_chars:
            return []
        try:
            places = await self._tool.autocomplete(query, self._limit)
        except Exception as exc:
            _LOGGER.warning("autocomplete failed for %r: %s", query, redact_sensitive(str(exc)))
            return []
        return list(places)[: self._limit]

    def schedule(self, text: str | None, deliver: Deliver) -> Optional[asyncio.Task]:
        """
        React to an input change. Must be called from a running event loop.
        Short input delivers [] right away and schedules nothing. Every call
        supersedes whatever an earlier call scheduled or has in flight.
        """
        self.cancel()
        query = (text or "").strip()
        if len(query) < self._min_chars:
            deliver([])
            return None
        self._pending = asyncio.get_running_loop().create_task(self._debounced(query, deliver, self._generation))
        return self._pending

    def cancel(self) -> None:
        """Invalidate the pending timer and any lookup already in flight."""
        self._generation += 1
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def _debounced(self, query: str, deliver: Deliver, generation: int) -> None:
        await asyncio.sleep(self._delay)
        self._pending = None
        self._issued += 1
        places = await self.suggest(query)
        if generation != self._generation:
            _LOGGER.debug("discarding stale suggestions for %r", query)
            return
        deliver(places)
