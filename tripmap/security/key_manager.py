"""Central API key manager.

Every provider credential is read through this module so that keys are
cached in one place and can be scrubbed from any log line or exception
message. Adapters must not call os.getenv for keys directly.
"""

from __future__ import annotations

import os
import time
from typing import Optional

from tripmap.security.redact import redact_sensitive
from tripmap.shared.exceptions import KeyMissingError

GEOAPIFY_KEY_NAME = "GEOAPIFY_API_KEY"
OPENWEATHER_KEY_NAME = "OPENWEATHER_API_KEY"


class _KeyEntry:
    __slots__ = ("value", "loaded_at", "source")

    def __init__(self, value: str, source: str):
        self.value = value
        self.loaded_at = time.time()
        self.source = source


class KeyManager:
    """Process-wide key manager."""

    def __init__(self):
        self._keys: dict[str, _KeyEntry] = {}

    def get(self, name: str, *, required: bool = False) -> Optional[str]:
        """Return the key value, loading it from the environment on first use."""
        entry = self._keys.get(name)
        if entry is None:
            raw = os.getenv(name, "").strip()
            if raw:
                entry = _KeyEntry(value=raw, source="env")
                self._keys[name] = entry
            elif required:
                raise KeyMissingError(name)
            else:
                return None
        return entry.value

    def get_geoapify_key(self, *, required: bool = True) -> str:
        return self.get(GEOAPIFY_KEY_NAME, required=required) or ""

    def get_openweather_key(self) -> Optional[str]:
        return self.get(OPENWEATHER_KEY_NAME)

    def has_key(self, name: str) -> bool:
        if name in self._keys:
            return True
        return bool(os.getenv(name, "").strip())

    @staticmethod
    def redact(value: str) -> str:
        """Keep only the first and last four characters."""
        if not value or len(value) <= 8:
            return "****"
        return value[:4] + "****" + value[-4:]

    def scrub_text(self, text: str) -> str:
        """Erase every known key value from arbitrary text."""
        result = str(text) if text is not None else ""
        for name, entry in self._keys.items():
            if entry.value and entry.value in result:
                result = result.replace(entry.value, f"[{name}:***REDACTED***]")
        return redact_sensitive(result)

    def reload(self, name: str) -> None:
        """Force a reload from the environment (key rotation, tests)."""
        raw = os.getenv(name, "").strip()
        if raw:
            self._keys[name] = _KeyEntry(value=raw, source="env")
        else:
            self._keys.pop(name, None)


_manager: Optional[KeyManager] = None


def get_key_manager() -> KeyManager:
    global _manager
    if _manager is None:
        _manager = KeyManager()
    return _manager
