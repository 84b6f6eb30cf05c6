"""Debounced autocomplete with stale-response discard."""

from __future__ import annotations

import asyncio

from tripmap.domain.models import Place
from tripmap.planner.suggester import AutocompleteSuggester


class _AutocompleteTool:
    def __init__(self, slow: dict[str, float] | None = None, fail: bool = False) -> None:
        self.queries: list[str] = []
        self.slow = slow or {}
        self.fail = fail

    async def search(self, text, limit):
        return []

    async def autocomplete(self, text, limit):
        self.queries.append(text)
        await asyncio.sleep(self.slow.get(text, 0))
        if self.fail:
            raise RuntimeError("autocomplete backend down")
        return [Place(lat=i, lon=i, display=f"{text}-{i}") for i in range(10)][:limit]


def test_short_text_delivers_empty_without_lookup():
    tool = _AutocompleteTool()
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.01)
        assert suggester.schedule("p", delivered.append) is None
        assert suggester.schedule("", delivered.append) is None

    asyncio.run(scenario())
    assert delivered == [[], []]
    assert tool.queries == []


def test_only_the_last_keystroke_is_looked_up():
    tool = _AutocompleteTool()
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.05)
        suggester.schedule("pa", delivered.append)
        suggester.schedule("par", delivered.append)
        task = suggester.schedule("pari", delivered.append)
        await task
        return suggester.issued

    issued = asyncio.run(scenario())
    assert tool.queries == ["pari"]
    assert issued == 1
    assert len(delivered) == 1
    assert len(delivered[0]) == 6
    assert delivered[0][0].display == "pari-0"


def test_slow_earlier_lookup_does_not_overwrite_newer_results():
    tool = _AutocompleteTool(slow={"berl": 0.2})
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.01)
        slow_task = suggester.schedule("berl", delivered.append)
        await asyncio.sleep(0.05)  # timer fired, "berl" lookup in flight
        fast_task = suggester.schedule("berlin", delivered.append)
        await fast_task
        await slow_task

    asyncio.run(scenario())
    assert tool.queries == ["berl", "berlin"]
    assert len(delivered) == 1
    assert delivered[0][0].display == "berlin-0"


def test_cancel_invalidates_pending_timer():
    tool = _AutocompleteTool()
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.05)
        task = suggester.schedule("rome", delivered.append)
        suggester.cancel()
        await asyncio.sleep(0.1)
        return task

    task = asyncio.run(scenario())
    assert task.cancelled()
    assert tool.queries == []
    assert delivered == []


def test_suggest_returns_empty_on_failure_or_short_query():
    failing = AutocompleteSuggester(_AutocompleteTool(fail=True), delay=0)
    assert asyncio.run(failing.suggest("lisbon")) == []
    assert asyncio.run(failing.suggest("l")) == []


def test_debounce_settings_come_from_environment(monkeypatch):
    monkeypatch.setenv("SUGGEST_DEBOUNCE_MS", "120")
    monkeypatch.setenv("SUGGEST_MIN_CHARS", "3")
    suggester = AutocompleteSuggester(_AutocompleteTool())
    assert suggester._delay == 0.12
    assert suggester._min_chars == 3


def test_clearing_the_field_discards_lookup_in_flight():
    tool = _AutocompleteTool(slow={"berl": 0.1})
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.01)
        task = suggester.schedule("berl", delivered.append)
        await asyncio.sleep(0.05)  # lookup in flight
        suggester.schedule("", delivered.append)
        await task

    asyncio.run(scenario())
    assert tool.queries == ["berl"]
    assert delivered == [[]]


def test_keystroke_inside_debounce_window_discards_lookup_in_flight():
    tool = _AutocompleteTool(slow={"berl": 0.05})
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.1)
        slow_task = suggester.schedule("berl", delivered.append)
        await asyncio.sleep(0.125)  # "berl" lookup in flight
        newer = suggester.schedule("berli", delivered.append)
        await slow_task  # finishes while "berli" is still debouncing
        assert delivered == []
        await newer

    asyncio.run(scenario())
    assert tool.queries == ["berl", "berli"]
    assert len(delivered) == 1
    assert delivered[0][0].display == "berli-0"


def test_cancel_discards_lookup_in_flight():
    tool = _AutocompleteTool(slow={"rome": 0.05})
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.01)
        task = suggester.schedule("rome", delivered.append)
        await asyncio.sleep(0.03)
        suggester.cancel()
        await task

    asyncio.run(scenario())
    assert tool.queries == ["rome"]
    assert delivered == []


def test_whitespace_padded_short_text_is_not_scheduled():
    tool = _AutocompleteTool()
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.01)
        assert suggester.schedule("  a ", delivered.append) is None
        await asyncio.sleep(0.03)
        return suggester.issued

    assert asyncio.run(scenario()) == 0
    assert delivered == [[]]
    assert tool.queries == []


def test_scheduled_lookup_uses_trimmed_text():
    tool = _AutocompleteTool()
    delivered: list[list[Place]] = []

    async def scenario():
        suggester = AutocompleteSuggester(tool, delay=0.01)
        await suggester.schedule("  oslo ", delivered.append)

    asyncio.run(scenario())
    assert tool.queries == ["oslo"]
