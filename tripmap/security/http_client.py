"""Secure HTTP client: single exit point for every external API call.

Responsibilities:
  1. scrub API keys from exception messages
  2. uniform timeout / retry policy, capped through the environment
  3. isolate the httpx dependency
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Optional

import httpx

from tripmap.security.key_manager import get_key_manager
from tripmap.shared.exceptions import ToolError

_logger = logging.getLogger("tripmap.http")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def resolve_timeout(timeout: Optional[float]) -> float:
    value = timeout if timeout is not None else _env_float("TOOL_HTTP_TIMEOUT_SECONDS", 10.0)
    cap = _env_float("TOOL_HTTP_TIMEOUT_CAP_SECONDS", 30.0)
    floor = _env_float("TOOL_HTTP_TIMEOUT_FLOOR_SECONDS", 1.0)
    return float(max(floor, min(cap, value)))


def resolve_retries(max_retries: Optional[int]) -> int:
    value = max_retries if max_retries is not None else _env_int("TOOL_HTTP_RETRIES", 1)
    cap = _env_int("TOOL_HTTP_RETRY_CAP", 3)
    return max(0, min(cap, value))


class SecureHttpClient:
    """Async wrapper around httpx with key scrubbing."""

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        tool_name: str = "http",
    ):
        self._timeout = resolve_timeout(timeout)
        self._max_retries = resolve_retries(max_retries)
        self._tool_name = tool_name
        self._km = get_key_manager()

    async def get(
        self,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        Issue a GET request and return the decoded JSON body.
        Non-2xx statuses, transport errors and undecodable bodies raise ToolError.
        """
        last_error: Optional[ToolError] = None

        for attempt in range(1, self._max_retries + 2):
            try:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.get(url, params=params, headers=headers)
                resp.raise_for_status()
                return resp.json()
            except httpx.HTTPStatusError as e:
                safe_msg = self._km.scrub_text(str(e))
                last_error = ToolError(self._tool_name, f"HTTP {e.response.status_code}: {safe_msg}")
                if e.response.status_code < 500:
                    break
            except httpx.TimeoutException:
                last_error = ToolError(
                    self._tool_name, f"request timed out ({self._timeout}s), attempt {attempt}"
                )
            except httpx.HTTPError as e:
                safe_msg = self._km.scrub_text(str(e))
                last_error = ToolError(self._tool_name, f"network request failed: {safe_msg}")
            except ValueError as e:
                safe_msg = self._km.scrub_text(str(e))
                last_error = ToolError(self._tool_name, f"invalid JSON body: {safe_msg}")
                break

            if attempt <= self._max_retries:
                _logger.debug("%s retry %d after: %s", self._tool_name, attempt, last_error)
                await asyncio.sleep(0.5 * attempt)

        raise last_error  # type: ignore[misc]
