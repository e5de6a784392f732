"""Time bounded single-flight cache around a device fetch."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A produced value and the clock reading taken when it was stored."""

    value: T | None
    created: float


class ExpiringCache(Generic[T]):
    """Memoise the result of ``producer`` for ``ttl``.

    Refreshes are serialised by a lock, so callers arriving while a refresh
    is in flight wait for it and reuse its result instead of starting a
    second fetch. ``None`` results are cached like any other value.
    """

    def __init__(
        self,
        ttl: timedelta,
        producer: Callable[[], Awaitable[T | None]],
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialise an empty cache."""

        self._ttl = ttl.total_seconds()
        self._producer = producer
        self._clock = clock
        self._entry: CacheEntry[T] | None = None
        self._lock = asyncio.Lock()

    @property
    def entry(self) -> CacheEntry[T] | None:
        """Return the current entry, expired or not."""

        return self._entry

    def is_expired(self) -> bool:
        """Return True when the next read has to invoke the producer."""

        entry = self._entry
        if entry is None:
            return True
        return self._clock() - entry.created > self._ttl

    async def async_get_value(self) -> T | None:
        """Return the cached value, refreshing it first when stale."""

        async with self._lock:
            if self.is_expired():
                value = await self._producer()
                self._entry = CacheEntry(value, self._clock())
            entry = self._entry
        return entry.value if entry is not None else None

    def invalidate(self) -> None:
        """Drop the current entry."""

        self._entry = None
