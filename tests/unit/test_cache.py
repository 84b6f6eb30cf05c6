"""Provider response caches."""

from __future__ import annotations

import asyncio

from tripmap.adapters.places import real as real_places
from tripmap.infrastructure.cache import MemoryCache, make_cache_key, places_cache
from tripmap.security.key_manager import get_key_manager
from tripmap.tools.interfaces import PlacesSearchInput


def test_entries_expire_after_ttl(monkeypatch):
    clock = [100.0]
    monkeypatch.setattr("tripmap.infrastructure.cache._clock", lambda: clock[0])
    cache = MemoryCache("weather", ttl_seconds=600.0, max_entries=10)
    cache.set("k", {"temp": 21.0})

    clock[0] = 699.0
    assert cache.get("k") == {"temp": 21.0}
    clock[0] = 700.0
    assert cache.get("k") is None
    assert cache.stats["size"] == 0
    assert (cache.stats["hits"], cache.stats["misses"]) == (1, 1)


def test_least_recently_read_entry_is_evicted():
    cache = MemoryCache("route", ttl_seconds=60.0, max_entries=2)
    cache.set("delhi-agra", 1)
    cache.set("agra-jaipur", 2)
    cache.get("delhi-agra")
    cache.set("jaipur-delhi", 3)

    assert cache.get("agra-jaipur") is None
    assert cache.get("delhi-agra") == 1
    assert cache.get("jaipur-delhi") == 3


def test_cache_key_is_provider_prefixed_and_order_sensitive():
    key = make_cache_key("osrm", [(28.6139, 77.209), (27.1767, 78.0081)], "driving")
    assert key.startswith("osrm:")
    assert key != make_cache_key("osrm", [(27.1767, 78.0081), (28.6139, 77.209)], "driving")
    assert make_cache_key("geoapify", "Agra", 1) != make_cache_key("geoapify", "Agra", 6)


def test_repeated_lodging_search_is_served_from_cache(monkeypatch):
    monkeypatch.setenv("GEOAPIFY_API_KEY", "geo-test-key-123456")
    get_key_manager().reload("GEOAPIFY_API_KEY")
    calls: list[str] = []

    async def fake_get(url: str, *, params: dict):
        calls.append(url)
        return {"features": [{"geometry": {"coordinates": [78.04, 27.17]}, "properties": {"place_id": "t1"}}]}

    monkeypatch.setattr("tripmap.adapters.places.real._http.get", fake_get)
    params = PlacesSearchInput(lat=27.17671, lon=78.00812)

    first = asyncio.run(real_places.search_places(params))
    second = asyncio.run(real_places.search_places(PlacesSearchInput(lat=27.17669, lon=78.00808)))

    assert first == second
    assert len(calls) == 1
    assert places_cache.stats["hits"] == 1
