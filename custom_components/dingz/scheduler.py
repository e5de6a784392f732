"""Recurring poll timer owned by a device handler."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

_LOGGER = logging.getLogger(__name__)


class PollScheduler:
    """Run ``callback`` immediately and then every ``interval``.

    The next tick is armed once the previous one finished (fixed delay).
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[Any]],
        interval: timedelta,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        """Store the tick callback and the delay between ticks."""

        if interval.total_seconds() <= 0:
            raise ValueError("Poll interval must be positive")
        self._callback = callback
        self._interval = interval
        self._logger = logger or _LOGGER
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: asyncio.TimerHandle | asyncio.Handle | None = None
        self._task: asyncio.Task[Any] | None = None
        self._running = False

    @property
    def interval(self) -> timedelta:
        """Return the delay between ticks."""

        return self._interval

    @property
    def running(self) -> bool:
        """Return True between ``start`` and ``cancel``."""

        return self._running

    def start(self) -> None:
        """Schedule the first tick without delay.

        Must be called from within the running event loop.
        """

        if self._running:
            return
        self._loop = asyncio.get_running_loop()
        self._running = True
        self._handle = self._loop.call_soon(self._tick)

    def cancel(self) -> None:
        """Stop ticking; safe to call more than once.

        A tick that is currently running is interrupted.
        """

        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    def _tick(self) -> None:
        self._handle = None
        if not self._running or self._loop is None:
            return
        self._task = self._loop.create_task(self._async_run())

    async def _async_run(self) -> None:
        try:
            await self._callback()
        except asyncio.CancelledError:
            raise
        except Exception:  # noqa: BLE001 - keep polling after unexpected errors
            self._logger.exception("Unexpected error while polling")
        finally:
            if self._running and self._loop is not None:
                self._task = None
                self._handle = self._loop.call_later(
                    self._interval.total_seconds(), self._tick
                )
