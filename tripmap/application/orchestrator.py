"""Trip planning orchestrator.

Owns the TripState snapshot. Form edits replace the snapshot immediately;
a planning run works on a copy and swaps its result in once, at the end.
Only one run may be in flight per orchestrator.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from tripmap.domain.enums import TravelMode
from tripmap.domain.exceptions import PlaceNotFoundError, PlanError, PlanPreconditionError
from tripmap.domain.models import Place, TripState, Waypoint
from tripmap.infrastructure.logging import StructuredLogger, get_logger
from tripmap.planner.geocoder import Geocoder
from tripmap.planner.places import PlacesFetcher
from tripmap.planner.route_estimator import RouteEstimator
from tripmap.planner.weather import WeatherFetcher

_LOGGER = logging.getLogger("tripmap.orchestrator")


class TripOrchestrator:
    def __init__(
        self,
        *,
        geocoder: Geocoder | None = None,
        route_estimator: RouteEstimator | None = None,
        places: PlacesFetcher | None = None,
        weather: WeatherFetcher | None = None,
        logger: StructuredLogger | None = None,
        state: TripState | None = None,
    ) -> None:
        self._geocoder = geocoder or Geocoder()
        self._routes = route_estimator or RouteEstimator()
        self._places = places or PlacesFetcher()
        self._weather = weather or WeatherFetcher()
        self._logger = logger
        self._state = state or TripState()
        self._running = False

    @property
    def state(self) -> TripState:
        return self._state

    @property
    def running(self) -> bool:
        return self._running

    @property
    def route_estimator(self) -> RouteEstimator:
        return self._routes

    # ── form edits ─────────────────────────────────────

    def _edit(self, **updates: Any) -> TripState:
        updates["revision"] = self._state.revision + 1
        self._state = self._state.model_copy(update=updates)
        return self._state

    def set_origin_text(self, text: str) -> TripState:
        return self._edit(origin_text=text, origin=None)

    def select_origin(self, place: Place) -> TripState:
        return self._edit(origin_text=place.display or "", origin=place)

    def set_destination_text(self, text: str) -> TripState:
        return self._edit(destination_text=text, destination=None)

    def select_destination(self, place: Place) -> TripState:
        return self._edit(destination_text=place.display or "", destination=place)

    def set_mode(self, mode: TravelMode | str) -> TripState:
        return self._edit(mode=TravelMode(mode))

    def add_waypoint(self, text: str = "") -> TripState:
        return self._edit(waypoints=self._state.waypoints + (Waypoint(text=text),))

    def remove_waypoint(self, index: int) -> TripState:
        waypoints = list(self._state.waypoints)
        del waypoints[index]
        return self._edit(waypoints=tuple(waypoints))

    def set_waypoint_text(self, index: int, text: str) -> TripState:
        waypoints = list(self._state.waypoints)
        waypoints[index] = waypoints[index].with_text(text)
        return self._edit(waypoints=tuple(waypoints))

    def select_waypoint(self, index: int, place: Place) -> TripState:
        waypoints = list(self._state.waypoints)
        waypoints[index] = Waypoint.from_place(place)
        return self._edit(waypoints=tuple(waypoints))

    # ── planning run ───────────────────────────────────

    async def plan_trip(self) -> TripState:
        """
        Run the pipeline once and return the committed snapshot.

        A call made while another run is in flight is rejected: the current
        snapshot is returned untouched. If the form is edited during the run,
        the run's result is discarded at commit time.
        """
        if self._running:
            _LOGGER.warning("plan_trip rejected: a planning run is already in flight")
            return self._state

        self._running = True
        logger = self._logger or get_logger()
        started = self._state.model_copy(update={"error": "", "loading": True})
        self._state = started
        updates: dict[str, Any] = {}
        logger.step_start("plan_trip", mode=started.mode.value, waypoints=len(started.waypoints))
        try:
            updates = await self._run(started, logger)
        except PlanError as exc:
            updates = {"error": str(exc)}
            logger.error("plan_trip", str(exc), error_type=type(exc).__name__)
        finally:
            self._running = False
            self._commit(started.revision, updates, logger)
            logger.step_end("plan_trip", error=self._state.error)
        return self._state

    def _commit(self, revision: int, updates: dict[str, Any], logger: StructuredLogger) -> None:
        current = self._state
        if current.revision != revision:
            logger.warning("commit", "form edited during run, result discarded")
            updates = {}
        self._state = current.model_copy(update={**updates, "loading": False})

    async def _resolve_endpoint(self, place: Optional[Place], text: str, label: str, logger: StructuredLogger) -> Optional[Place]:
        if place is not None or not text:
            return place
        logger.tool_call("geocoder", field=label)
        resolved = await self._geocoder.resolve(text)
        if resolved is None:
            raise PlaceNotFoundError(f"{label} not found")
        return resolved

    async def _resolve_waypoints(self, waypoints: tuple[Waypoint, ...], logger: StructuredLogger) -> tuple[Waypoint, ...]:
        resolved: list[Waypoint] = []
        for index, waypoint in enumerate(waypoints):
            if waypoint.place is None and waypoint.text:
                logger.tool_call("geocoder", field=f"waypoint[{index}]")
                place = await self._geocoder.resolve(waypoint.text)
                if place is None:
                    logger.warning("resolve", f"waypoint {index + 1} not found, skipped")
                else:
                    waypoint = Waypoint(text=waypoint.text, place=place)
            resolved.append(waypoint)
        return tuple(resolved)

    async def _run(self, state: TripState, logger: StructuredLogger) -> dict[str, Any]:
        logger.step_start("resolve")
        origin = await self._resolve_endpoint(state.origin, state.origin_text, "Origin", logger)
        destination = await self._resolve_endpoint(state.destination, state.destination_text, "Destination", logger)
        if origin is None or destination is None:
            raise PlanPreconditionError("Select origin and destination (or type them)")
        waypoints = await self._resolve_waypoints(state.waypoints, logger)
        logger.step_end("resolve")

        resolved = state.model_copy(update={"origin": origin, "destination": destination, "waypoints": waypoints})
        places = resolved.routed_places()
        if len(places) < 2:
            raise PlanPreconditionError("Need at least origin and destination")

        logger.step_start("route")
        route = await self._routes.estimate(places, state.mode)
        logger.step_end(
            "route",
            source=route.source.value,
            distance_km=route.summary.distance_km,
            duration_hours=route.summary.duration_hours,
        )

        logger.step_start("destination_info")
        pois, weather, forecast = await asyncio.gather(
            self._places.nearby(destination.lat, destination.lon),
            self._weather.current(destination.lat, destination.lon),
            self._weather.forecast(destination.lat, destination.lon),
        )
        logger.step_end("destination_info", lodging=len(pois), weather=weather is not None, forecast_days=len(forecast))

        logger.summary(stops=len(places), route_source=route.source.value)
        return {
            "origin": origin,
            "destination": destination,
            "waypoints": waypoints,
            "route": route,
            "points_of_interest": tuple(pois),
            "weather": weather,
            "forecast": tuple(forecast),
        }
