"""pytest global fixtures: isolate tests from real providers."""

import pytest

_PROVIDER_ENV = (
    "GEOAPIFY_API_KEY",
    "OPENWEATHER_API_KEY",
    "ROUTING_PROVIDER",
    "TOOL_ALLOWLIST",
    "ENABLE_TOOL_FAULT_INJECTION",
    "TOOL_FAULT_INJECTION",
    "TOOL_FAULT_RATE",
    "SUGGEST_DEBOUNCE_MS",
    "SUGGEST_MIN_CHARS",
)


@pytest.fixture(autouse=True)
def no_real_apis(monkeypatch):
    """Drop provider keys and caches so every test starts offline and cold."""
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)

    from tripmap.infrastructure.cache import clear_all_caches
    from tripmap.security.key_manager import GEOAPIFY_KEY_NAME, OPENWEATHER_KEY_NAME, get_key_manager

    km = get_key_manager()
    for key_name in (GEOAPIFY_KEY_NAME, OPENWEATHER_KEY_NAME):
        km.reload(key_name)
    clear_all_caches()
    yield
    clear_all_caches()
