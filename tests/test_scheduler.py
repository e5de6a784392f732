"""Tests for the poll scheduler."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

import pytest

from custom_components.dingz.scheduler import PollScheduler


def test_interval_must_be_positive() -> None:
    """A zero interval is rejected."""

    async def _callback() -> None:
        return None

    with pytest.raises(ValueError):
        PollScheduler(_callback, timedelta(0))


@pytest.mark.asyncio
async def test_first_tick_runs_without_delay() -> None:
    """The first poll happens on the next loop iteration."""

    ticks = 0

    async def _callback() -> None:
        nonlocal ticks
        ticks += 1

    scheduler = PollScheduler(_callback, timedelta(hours=1))
    scheduler.start()
    assert scheduler.running
    for _ in range(3):
        await asyncio.sleep(0)
    scheduler.cancel()

    assert ticks == 1


@pytest.mark.asyncio
async def test_ticks_repeat_until_cancelled() -> None:
    """Ticks keep coming every interval and stop after cancel."""

    ticks = 0

    async def _callback() -> None:
        nonlocal ticks
        ticks += 1

    scheduler = PollScheduler(_callback, timedelta(milliseconds=10))
    scheduler.start()
    await asyncio.sleep(0.1)
    scheduler.cancel()
    seen = ticks
    await asyncio.sleep(0.05)

    assert seen >= 3
    assert ticks == seen
    assert not scheduler.running


@pytest.mark.asyncio
async def test_cancel_is_idempotent() -> None:
    """Cancelling twice, or before start, is harmless."""

    async def _callback() -> None:
        return None

    scheduler = PollScheduler(_callback, timedelta(seconds=1))
    scheduler.cancel()
    scheduler.start()
    scheduler.cancel()
    scheduler.cancel()

    assert not scheduler.running


@pytest.mark.asyncio
async def test_cancel_interrupts_running_tick() -> None:
    """A tick in flight is cancelled with the scheduler."""

    started = asyncio.Event()
    finished = False

    async def _callback() -> None:
        nonlocal finished
        started.set()
        await asyncio.sleep(10)
        finished = True

    scheduler = PollScheduler(_callback, timedelta(seconds=1))
    scheduler.start()
    await asyncio.wait_for(started.wait(), 1)
    scheduler.cancel()
    await asyncio.sleep(0.01)

    assert not finished


@pytest.mark.asyncio
async def test_errors_are_logged_and_polling_continues(caplog) -> None:
    """An unexpected exception does not stop the timer."""

    ticks = 0

    async def _callback() -> None:
        nonlocal ticks
        ticks += 1
        raise RuntimeError("boom")

    caplog.set_level(logging.ERROR)
    scheduler = PollScheduler(_callback, timedelta(milliseconds=10))
    scheduler.start()
    await asyncio.sleep(0.08)
    scheduler.cancel()

    assert ticks >= 2
    assert "Unexpected error while polling" in caplog.text
