"""Offline route adapter: the road router is never reachable.

Selected with ROUTING_PROVIDER=offline so car and bike trips take the
straight-line fallback without touching the network.
"""

from __future__ import annotations

from tripmap.shared.exceptions import ToolError
from tripmap.tools.interfaces import RoadRoute, RoadRouteInput


async def route(params: RoadRouteInput) -> RoadRoute:
    raise ToolError("offline_route", f"road routing is disabled (profile={params.profile})")
