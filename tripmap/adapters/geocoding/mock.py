"""Mock geocoding adapter backed by a small offline gazetteer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from tripmap.domain.models import Place
from tripmap.shared.exceptions import ToolError

DATA_FILE = Path(__file__).resolve().parents[2] / "data" / "gazetteer.json"
_cache: Optional[list[dict]] = None


def _load_data() -> list[dict]:
    global _cache
    if _cache is not None:
        return _cache
    if not DATA_FILE.exists():
        raise ToolError("mock_geocoding", f"Data file not found: {DATA_FILE}")
    with open(DATA_FILE, encoding="utf-8") as f:
        _cache = json.load(f)
    return _cache


def _to_place(raw: dict) -> Place:
    return Place(
        lat=raw["lat"],
        lon=raw["lon"],
        display=raw["display"],
        raw_metadata={"source": "gazetteer", "name": raw["name"]},
    )


async def search(text: str, limit: int) -> list[Place]:
    needle = text.strip().lower()
    exact = [raw for raw in _load_data() if raw["name"].lower() == needle]
    partial = [raw for raw in _load_data() if needle in raw["display"].lower() and raw not in exact]
    return [_to_place(raw) for raw in (exact + partial)[:limit]]


async def autocomplete(text: str, limit: int) -> list[Place]:
    needle = text.strip().lower()
    matches = [raw for raw in _load_data() if raw["name"].lower().startswith(needle)]
    return [_to_place(raw) for raw in matches[:limit]]
