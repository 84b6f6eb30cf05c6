"""Infrastructure configuration helpers."""

from __future__ import annotations

import os

_TRUTHY = {"1", "true", "yes", "on"}


def get_env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def is_enabled(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


__all__ = ["get_env_float", "is_enabled"]
