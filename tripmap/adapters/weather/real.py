"""Real weather adapter backed by the OpenWeatherMap 2.5 API.

Environment: OPENWEATHER_API_KEY
Endpoints:
  current:  /data/2.5/weather
  forecast: /data/2.5/forecast   (5 days, 3-hour steps)
"""

from __future__ import annotations

from typing import Any

from tripmap.config.settings import openweather_base_url
from tripmap.domain.models import WeatherSnapshot
from tripmap.infrastructure.cache import make_cache_key, weather_cache
from tripmap.security.http_client import SecureHttpClient
from tripmap.security.key_manager import get_key_manager
from tripmap.tools.interfaces import ForecastEntry, ToolError, WeatherInput


def _get_api_key() -> str:
    key = get_key_manager().get_openweather_key()
    if not key:
        raise ToolError("real_weather", "OPENWEATHER_API_KEY is not configured")
    return key


_http = SecureHttpClient(tool_name="real_weather")


def _temperature(item: dict) -> float | None:
    main = item.get("main")
    if not isinstance(main, dict):
        return None
    temp = main.get("temp")
    if isinstance(temp, bool) or not isinstance(temp, (int, float)):
        return None
    return float(temp)


def _description(item: dict) -> str:
    weather = item.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        return str(weather[0].get("description") or "")
    return ""


async def _fetch(endpoint: str, params: WeatherInput) -> Any:
    cache_key = make_cache_key("openweather", endpoint, round(params.lat, 3), round(params.lon, 3), params.units)
    cached = weather_cache.get(cache_key)
    if cached is not None:
        return cached
    data = await _http.get(
        f"{openweather_base_url()}/data/2.5/{endpoint}",
        params={"lat": params.lat, "lon": params.lon, "units": params.units, "appid": _get_api_key()},
    )
    if not isinstance(data, dict):
        raise ToolError("real_weather", f"unexpected {endpoint} payload type: {type(data).__name__}")
    weather_cache.set(cache_key, data)
    return data


async def current(params: WeatherInput) -> WeatherSnapshot:
    data = await _fetch("weather", params)
    return WeatherSnapshot(
        temperature_c=_temperature(data) or 0.0,
        description=_description(data),
    )


async def forecast(params: WeatherInput) -> list[ForecastEntry]:
    data = await _fetch("forecast", params)
    items = data.get("list")
    if not isinstance(items, list):
        return []
    entries: list[ForecastEntry] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        entries.append(
            ForecastEntry(
                timestamp=str(item.get("dt_txt") or ""),
                temperature_c=_temperature(item),
                description=_description(item),
            )
        )
    return entries
