# tests/managers/test_debounce.py
"""Tests for DebouncedSaver."""

from asyncio import get_running_loop, sleep
from unittest.mock import AsyncMock

import pytest

from app.managers.debounce import DebouncedSaver

DELAY = 0.2


@pytest.fixture
def save() -> AsyncMock:
    return AsyncMock()


@pytest.mark.asyncio
async def test_burst_collapses_to_one_write_with_latest_state(save: AsyncMock) -> None:
    saver: DebouncedSaver[str] = DebouncedSaver(save, delay=DELAY)

    saver.schedule("v1")
    await sleep(0.05)
    saver.schedule("v2")
    await sleep(0.05)
    saver.schedule("v3")

    await sleep(DELAY / 2)
    save.assert_not_awaited()

    await sleep(DELAY)
    save.assert_awaited_once_with("v3")
    assert not saver.pending


@pytest.mark.asyncio
async def test_write_lands_one_interval_after_last_edit() -> None:
    # Edits at 0, 0.5 and 1.0 with a 2.0 interval, scaled by 0.2: one write at 0.6.
    scale = 0.2
    loop = get_running_loop()
    writes: list[tuple[float, str]] = []

    async def record(value: str) -> None:
        writes.append((loop.time(), value))

    saver: DebouncedSaver[str] = DebouncedSaver(record, delay=2.0 * scale)
    start = loop.time()

    saver.schedule("t=0.0")
    await sleep(0.5 * scale)
    saver.schedule("t=0.5")
    await sleep(0.5 * scale)
    saver.schedule("t=1.0")

    await sleep(1.5 * scale)
    assert writes == []
    assert saver.pending

    await sleep(1.0 * scale)
    assert [value for _, value in writes] == ["t=1.0"]
    assert writes[0][0] - start >= 3.0 * scale
    assert not saver.pending


@pytest.mark.asyncio
async def test_separate_bursts_write_twice(save: AsyncMock) -> None:
    saver: DebouncedSaver[str] = DebouncedSaver(save, delay=0.05)

    saver.schedule("a")
    await sleep(0.15)
    saver.schedule("b")
    await sleep(0.15)

    assert [c.args[0] for c in save.await_args_list] == ["a", "b"]


@pytest.mark.asyncio
async def test_cancel_drops_pending_write(save: AsyncMock) -> None:
    saver: DebouncedSaver[str] = DebouncedSaver(save, delay=0.05)

    saver.schedule("a")
    assert saver.cancel() is True
    await sleep(0.1)

    save.assert_not_awaited()
    assert saver.cancel() is False


@pytest.mark.asyncio
async def test_flush_writes_immediately(save: AsyncMock) -> None:
    saver: DebouncedSaver[str] = DebouncedSaver(save, delay=10.0)

    saver.schedule("now")
    assert await saver.flush() is True

    save.assert_awaited_once_with("now")
    assert not saver.pending
    assert await saver.flush() is False


@pytest.mark.asyncio
async def test_failed_write_is_logged_not_raised(save: AsyncMock) -> None:
    save.side_effect = ConnectionError("store down")
    saver: DebouncedSaver[str] = DebouncedSaver(save, delay=0.01)

    saver.schedule("x")
    await sleep(0.05)
    save.assert_awaited_once_with("x")

    saver.schedule("y")
    assert await saver.flush() is True
