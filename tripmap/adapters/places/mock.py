"""Mock places adapter loading local lodging fixtures."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Optional

from tripmap.domain.constants import KM_PER_DEGREE
from tripmap.domain.models import PointOfInterest
from tripmap.shared.exceptions import ToolError
from tripmap.tools.interfaces import PlacesSearchInput

DATA_FILE = Path(__file__).resolve().parents[2] / "data" / "lodging_fixture.json"
_cache: Optional[list[dict]] = None


def _load_data() -> list[dict]:
    global _cache
    if _cache is not None:
        return _cache
    if not DATA_FILE.exists():
        raise ToolError("mock_places", f"Data file not found: {DATA_FILE}")
    with open(DATA_FILE, encoding="utf-8") as f:
        _cache = json.load(f)
    return _cache


async def search_places(params: PlacesSearchInput) -> list[PointOfInterest]:
    radius_km = params.radius_meters / 1000
    results: list[PointOfInterest] = []
    for raw in _load_data():
        offset_km = math.hypot(raw["lat"] - params.lat, raw["lon"] - params.lon) * KM_PER_DEGREE
        if offset_km > radius_km:
            continue
        results.append(PointOfInterest(**raw))
        if len(results) >= params.limit:
            break
    return results
