"""Planar proxy distance and summary formatting."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from tripmap.domain.constants import KM_PER_DEGREE
from tripmap.domain.models import Place


def proxy_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """sqrt(dlat^2 + dlon^2) * 111. A flat degree-to-km factor, not great-circle."""
    return math.sqrt((lat2 - lat1) ** 2 + (lon2 - lon1) ** 2) * KM_PER_DEGREE


def path_proxy_distance(places: Sequence[Place]) -> float:
    """Sum of proxy distances over consecutive places."""
    total = 0.0
    for prev, curr in zip(places, places[1:]):
        total += proxy_distance(prev.lat, prev.lon, curr.lat, curr.lon)
    return total


def format_one_decimal(value: float) -> str:
    """Exactly one fractional digit, rounding the exact binary value half up (1.45 is stored below the half)."""
    return str(Decimal(float(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
