# tests/test_debounce.py

from __future__ import annotations

import asyncio

import pytest

from taskboard.core.debounce import Debouncer
from taskboard.tasks.task_api import SearchInput, visible_tasks

DELAY = 0.05


@pytest.mark.asyncio
async def test_burst_of_triggers_collapses_into_one_call() -> None:
    calls: list[str] = []
    d = Debouncer(DELAY, calls.append)

    for text in ("b", "bu", "bug"):
        d.trigger(text)
        await asyncio.sleep(DELAY / 4)

    assert calls == []
    assert d.pending

    await asyncio.sleep(DELAY * 5)
    assert calls == ["bug"]
    assert not d.pending


@pytest.mark.asyncio
async def test_separate_pauses_fire_separately() -> None:
    calls: list[str] = []
    d = Debouncer(DELAY, calls.append)

    d.trigger("a")
    await asyncio.sleep(DELAY * 5)
    d.trigger("b")
    await asyncio.sleep(DELAY * 5)

    assert calls == ["a", "b"]


@pytest.mark.asyncio
async def test_cancel_and_flush() -> None:
    calls: list[str] = []
    d = Debouncer(DELAY, calls.append)

    d.trigger("dropped")
    d.cancel()
    await asyncio.sleep(DELAY * 5)
    assert calls == []

    d.trigger("now")
    d.flush()
    assert calls == ["now"]
    d.flush()  # nothing pending
    await asyncio.sleep(DELAY * 5)
    assert calls == ["now"]


@pytest.mark.asyncio
async def test_callback_error_is_contained() -> None:
    def boom(_: str) -> None:
        raise RuntimeError("boom")

    d = Debouncer(0, boom)
    d.trigger("x")
    await asyncio.sleep(DELAY)
    assert not d.pending


@pytest.mark.asyncio
async def test_search_input_updates_view_once_input_pauses(state) -> None:
    results: list[list[str]] = []
    box = SearchInput(state, delay=DELAY, on_change=lambda tasks: results.append([t.id for t in tasks]))

    for text in ("n", "na", "nav"):
        box.on_input(text)

    assert state.view.query == ""
    assert box.pending

    await asyncio.sleep(DELAY * 5)
    assert state.view.query == "nav"
    assert results == [["3"]]
    assert [t.id for t in visible_tasks(state)] == ["3"]


@pytest.mark.asyncio
async def test_search_input_close_drops_pending_query(state) -> None:
    box = SearchInput(state, delay=DELAY)
    box.on_input("profile")
    box.close()
    await asyncio.sleep(DELAY * 5)
    assert state.view.query == ""
    assert len(visible_tasks(state)) == 5


@pytest.mark.asyncio
async def test_search_input_delay_comes_from_settings(state) -> None:
    # conftest settings: search_debounce_ms=10
    box = SearchInput(state)
    assert box.delay == pytest.approx(0.01)

    box.on_input("profile")
    await asyncio.sleep(0.01 * 10)
    assert state.view.query == "profile"


def test_search_input_explicit_delay_wins(state) -> None:
    state.settings.search_debounce_ms = 5000
    assert SearchInput(state, delay=0.2).delay == pytest.approx(0.2)
    assert SearchInput(state).delay == pytest.approx(5.0)
