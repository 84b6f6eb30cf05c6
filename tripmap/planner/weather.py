"""Destination weather: current snapshot and a per-day forecast."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from tripmap.adapters.tool_factory import get_weather_tool
from tripmap.domain.constants import FORECAST_MAX_DAYS, WEATHER_UNITS
from tripmap.domain.models import ForecastDay, WeatherSnapshot
from tripmap.security.redact import redact_sensitive
from tripmap.tools.interfaces import ForecastEntry, WeatherInput, WeatherTool

_LOGGER = logging.getLogger("tripmap.weather")

_UNSET = object()


def _round_half_up(value: float) -> int:
    """Nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)


def collapse_forecast(entries: Iterable[ForecastEntry], max_days: int = FORECAST_MAX_DAYS) -> list[ForecastDay]:
    """Keep the first entry seen for each calendar date, up to `max_days` dates."""
    days: list[ForecastDay] = []
    seen: set[str] = set()
    for entry in entries:
        if len(days) >= max_days:
            break
        date = entry.timestamp.split(" ")[0] if entry.timestamp else ""
        if not date or date in seen:
            continue
        seen.add(date)
        days.append(
            ForecastDay(
                date=date,
                temperature_c=_round_half_up(entry.temperature_c or 0.0),
                description=entry.description,
            )
        )
    return days


class WeatherFetcher:
    """Both operations are no-ops when no weather credential is configured."""

    def __init__(self, tool: WeatherTool | None | object = _UNSET) -> None:
        self._tool = tool

    def _weather_tool(self) -> Optional[WeatherTool]:
        if self._tool is _UNSET:
            return get_weather_tool()
        return self._tool  # type: ignore[return-value]

    async def current(self, lat: float, lon: float) -> Optional[WeatherSnapshot]:
        try:
            tool = self._weather_tool()
            if tool is None:
                return None
            return await tool.current(WeatherInput(lat=lat, lon=lon, units=WEATHER_UNITS))
        except Exception as exc:
            _LOGGER.warning("current weather failed: %s", redact_sensitive(str(exc)))
            return None

    async def forecast(self, lat: float, lon: float) -> list[ForecastDay]:
        try:
            tool = self._weather_tool()
            if tool is None:
                return []
            entries = await tool.forecast(WeatherInput(lat=lat, lon=lon, units=WEATHER_UNITS))
        except Exception as exc:
            _LOGGER.warning("forecast failed: %s", redact_sensitive(str(exc)))
            return []
        return collapse_forecast(entries)
