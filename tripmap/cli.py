"""tripmap CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from tripmap.application.animator import LoggingMarkerLayer, RouteAnimator
from tripmap.application.orchestrator import TripOrchestrator
from tripmap.domain.enums import TravelMode
from tripmap.domain.models import TripState

_MODE_ICON = {"car": "🚗", "bike": "🚲", "flight": "✈️"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tripmap", description="Plan a multi-stop trip.")
    parser.add_argument("origin", help="origin place name")
    parser.add_argument("destination", help="destination place name")
    parser.add_argument("--via", action="append", default=[], metavar="STOP", help="intermediate stop (repeatable)")
    parser.add_argument("--mode", choices=[m.value for m in TravelMode], default=TravelMode.CAR.value)
    parser.add_argument("--animate", action="store_true", help="replay the marker animation in the log")
    parser.add_argument("--json", action="store_true", help="print the trip state as JSON")
    return parser


def _format_trip(state: TripState) -> str:
    lines: list[str] = []
    stops = [state.origin_text] + [wp.text for wp in state.waypoints] + [state.destination_text]
    lines.append(" → ".join(s for s in stops if s))
    lines.append("=" * 50)

    skipped = [wp.text for wp in state.waypoints if wp.text and wp.place is None]
    if skipped:
        lines.append(f"⚠️  skipped unresolved stops: {', '.join(skipped)}")

    if state.route:
        summary = state.route.summary
        lines.append(f"{_MODE_ICON.get(state.mode.value, '')} Distance: {summary.distance_km} km")
        lines.append(f"⏱ Duration: {summary.duration_hours} hrs  ({state.route.source.value})")

    if state.weather:
        lines.append(f"\n🌤  {round(state.weather.temperature_c)}°C {state.weather.description}")
    for day in state.forecast:
        lines.append(f"   {day.date}  {day.temperature_c:>3}°C  {day.description}")

    lines.append(f"\n🏨 Nearby hotels: {len(state.points_of_interest)} found")
    for poi in state.points_of_interest:
        lines.append(f"   • {poi.name}" + (f" - {poi.address}" if poi.address else ""))
    return "\n".join(lines)


async def _run(args: argparse.Namespace) -> TripState:
    orchestrator = TripOrchestrator()
    orchestrator.set_origin_text(args.origin)
    orchestrator.set_destination_text(args.destination)
    for stop in args.via:
        orchestrator.add_waypoint(stop)
    orchestrator.set_mode(args.mode)

    state = await orchestrator.plan_trip()
    if args.animate and state.route and not state.error:
        animator = RouteAnimator(LoggingMarkerLayer())
        handle = animator.start(state.route.coordinates, state.mode)
        if handle is not None:
            await handle.wait()
    return state


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.animate else logging.WARNING, format="%(name)s %(message)s")

    state = asyncio.run(_run(args))
    if args.json:
        print(json.dumps(state.model_dump(mode="json"), ensure_ascii=False, indent=2))
    elif state.error:
        print(f"❌ {state.error}")
    else:
        print(_format_trip(state))
    return 1 if state.error else 0


if __name__ == "__main__":
    sys.exit(main())
