"""Structured logging: JSON lines with secret scrubbing."""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional


def _get_scrubber():
    """Import lazily to keep this module free of import cycles."""
    from tripmap.security.key_manager import get_key_manager

    return get_key_manager()


class StructuredLogger:
    """Emit one JSON object per line, scrubbing known keys."""

    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr
        self._timers: dict[str, float] = {}

    def _scrub(self, text: str) -> str:
        return _get_scrubber().scrub_text(text)

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        line = json.dumps(data, ensure_ascii=False, default=str)
        self._output.write(self._scrub(line) + "\n")
        self._output.flush()

    def step_start(self, step: str, **extra: Any) -> None:
        self._timers[step] = time.time()
        self._emit({"event": "step_start", "step": step, **extra})

    def step_end(self, step: str, **extra: Any) -> None:
        start = self._timers.pop(step, time.time())
        duration_ms = round((time.time() - start) * 1000, 1)
        self._emit({"event": "step_end", "step": step, "duration_ms": duration_ms, **extra})

    def tool_call(self, tool_name: str, **extra: Any) -> None:
        self._emit({"event": "tool_call", "tool": tool_name, **extra})

    def error(self, step: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "step": step, "error": self._scrub(error), **extra})

    def warning(self, step: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "step": step, "message": self._scrub(message), **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    return StructuredLogger(trace_id=trace_id)
