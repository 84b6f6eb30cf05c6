"""Application layer: planning runs and route animation."""

from tripmap.application.animator import AnimationHandle, LoggingMarkerLayer, MarkerLayer, RouteAnimator, tick_interval
from tripmap.application.orchestrator import TripOrchestrator

__all__ = [
    "TripOrchestrator",
    "RouteAnimator",
    "AnimationHandle",
    "MarkerLayer",
    "LoggingMarkerLayer",
    "tick_interval",
]
