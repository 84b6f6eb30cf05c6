"""Per-provider TTL caches for geocoding, routing, lodging and weather responses.

Keys are built from the provider name plus the request parts the adapter
considers significant (rounded coordinates, query text, profile). Entries
expire after the cache's TTL; when full, the least recently read entry goes.
"""

from __future__ import annotations

import json
import threading
import time
from collections import OrderedDict
from typing import Any, Optional

_clock = time.monotonic


class MemoryCache:
    def __init__(self, name: str, ttl_seconds: float, max_entries: int):
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        now = _clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry[0] <= now:
                if entry is not None:
                    del self._entries[key]
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return entry[1]

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (_clock() + self.ttl_seconds, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> dict[str, Any]:
        lookups = self._hits + self._misses
        return {
            "ttl_seconds": self.ttl_seconds,
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / lookups, 3) if lookups else 0.0,
        }


def make_cache_key(provider: str, *parts: Any) -> str:
    """`provider:<json parts>`, readable in diagnostics and stable across runs."""
    return f"{provider}:" + json.dumps(parts, default=str, ensure_ascii=False, separators=(",", ":"))


geocode_cache = MemoryCache("geocode", ttl_seconds=600.0, max_entries=500)
route_cache = MemoryCache("route", ttl_seconds=1800.0, max_entries=300)
places_cache = MemoryCache("places", ttl_seconds=600.0, max_entries=200)
weather_cache = MemoryCache("weather", ttl_seconds=600.0, max_entries=100)

ALL_CACHES = {cache.name: cache for cache in (geocode_cache, route_cache, places_cache, weather_cache)}


def clear_all_caches() -> None:
    for cache in ALL_CACHES.values():
        cache.clear()
