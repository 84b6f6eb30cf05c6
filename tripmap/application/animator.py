"""Time-stepped marker animation along a resolved route.

At most one animation is active per animator: starting a new one cancels the
previous timer task and removes its marker first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol, Sequence

from tripmap.domain.constants import DEFAULT_TICK_SECONDS, TICK_SECONDS
from tripmap.domain.models import LatLon
from tripmap.planner.viewport import marker_icon

_LOGGER = logging.getLogger("tripmap.animator")


def tick_interval(mode: Any) -> float:
    """Seconds between marker steps: faster modes step more often."""
    return TICK_SECONDS.get(str(getattr(mode, "value", mode)), DEFAULT_TICK_SECONDS)


class MarkerLayer(Protocol):
    """The map surface the marker is drawn on."""

    def add_marker(self, position: LatLon, icon: str) -> Any: ...

    def move_marker(self, marker: Any, position: LatLon) -> None: ...

    def remove_marker(self, marker: Any) -> None: ...


class LoggingMarkerLayer:
    """Headless layer that logs every marker operation."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _LOGGER
        self._next_id = 0

    def add_marker(self, position: LatLon, icon: str) -> int:
        self._next_id += 1
        self._logger.info("marker %d (%s) placed at %.5f,%.5f", self._next_id, icon, *position)
        return self._next_id

    def move_marker(self, marker: int, position: LatLon) -> None:
        self._logger.info("marker %d moved to %.5f,%.5f", marker, *position)

    def remove_marker(self, marker: int) -> None:
        self._logger.info("marker %d removed", marker)


class AnimationHandle:
    """Cancellable handle for one running animation."""

    def __init__(self, task: asyncio.Task, marker: Any, interval: float) -> None:
        self._task = task
        self.marker = marker
        self.interval = interval

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> None:
        if not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait until the traversal finishes or is cancelled."""
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise


class RouteAnimator:
    def __init__(self, layer: MarkerLayer) -> None:
        self._layer = layer
        self._handle: Optional[AnimationHandle] = None
        self._key: Optional[tuple[tuple[LatLon, ...], str]] = None

    @property
    def active(self) -> Optional[AnimationHandle]:
        return self._handle

    def start(self, route: Sequence[LatLon], mode: Any) -> Optional[AnimationHandle]:
        """
        Place a marker on the first coordinate and advance one coordinate per tick.
        Must be called from a running event loop. An empty route only stops the
        current animation.
        """
        self.stop()
        points = [tuple(p) for p in route]
        mode_key = str(getattr(mode, "value", mode))
        self._key = (tuple(points), mode_key)
        if not points:
            return None

        interval = tick_interval(mode_key)
        marker = self._layer.add_marker(points[0], marker_icon(mode_key))
        task = asyncio.get_running_loop().create_task(self._advance(marker, points, interval))
        self._handle = AnimationHandle(task, marker, interval)
        return self._handle

    def sync(self, route: Sequence[LatLon], mode: Any) -> Optional[AnimationHandle]:
        """Restart only when the (route, mode) pair differs from the current one."""
        key = (tuple(tuple(p) for p in route), str(getattr(mode, "value", mode)))
        if key == self._key:
            return self._handle
        return self.start(route, mode)

    def stop(self) -> None:
        """Cancel the pending timer and remove the marker."""
        handle, self._handle = self._handle, None
        self._key = None
        if handle is None:
            return
        handle.cancel()
        self._layer.remove_marker(handle.marker)

    async def _advance(self, marker: Any, points: list[LatLon], interval: float) -> None:
        for position in points[1:]:
            await asyncio.sleep(interval)
            self._layer.move_marker(marker, position)
        _LOGGER.debug("animation finished after %d steps", len(points))
