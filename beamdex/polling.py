"""Fixed-interval polling and last-write-wins caches.

Order lists and bot counters refresh on a timer independent of user
actions. A tick never overlaps the previous fetch: if that fetch is still
running the tick is skipped, and the running fetch is left alone.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

import structlog

from beamdex.constants import DEFAULT_POLL_INTERVAL

logger = structlog.get_logger()

T = TypeVar("T")


class LastWriteWinsCache(Generic[T]):
    """Read-through holder for a displayed value (current price, balances).

    Whatever response arrives last is kept, regardless of when its request
    was issued. Readers must tolerate a fresh value being replaced by an
    older one that happened to arrive later; the next refresh corrects it.
    """

    def __init__(self) -> None:
        self._value: T | None = None
        self._has_value = False
        self.updated_at: float | None = None
        self.writes = 0

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def value(self) -> T | None:
        return self._value

    def get(self, default: T | None = None) -> T | None:
        return self._value if self._has_value else default

    def set(self, value: T) -> None:
        self._value = value
        self._has_value = True
        self.updated_at = time.monotonic()
        self.writes += 1

    async def refresh(self, fetch: Callable[[], Awaitable[T]]) -> T:
        """Await fetch and store its result on arrival."""
        value = await fetch()
        self.set(value)
        return value

    def invalidate(self) -> None:
        self._value = None
        self._has_value = False
        self.updated_at = None


class Poller:
    """Calls ``fetch`` every ``interval`` seconds while running.

    Failures are logged and counted; they never stop the poller.

    Attributes:
        skipped_ticks: Ticks skipped because the previous fetch was still running
        completed: Fetches that returned
        failures: Fetches (or result handlers) that raised
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        interval: float = DEFAULT_POLL_INTERVAL,
        on_result: Callable[[Any], None] | None = None,
        name: str = "poller",
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self.fetch = fetch
        self.interval = interval
        self.on_result = on_result
        self.name = name
        self.skipped_ticks = 0
        self.completed = 0
        self.failures = 0
        self._loop_task: asyncio.Task[None] | None = None
        self._in_flight: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def fetch_in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    def tick(self) -> bool:
        """Start a fetch unless one is still running.

        Must be called from a running event loop.

        Returns:
            True if a fetch was started, False if the tick was skipped
        """
        if self.fetch_in_flight:
            self.skipped_ticks += 1
            logger.debug("poll_tick_skipped", poller=self.name, skipped=self.skipped_ticks)
            return False
        self._in_flight = asyncio.create_task(self._run_fetch())
        return True

    async def _run_fetch(self) -> None:
        try:
            result = await self.fetch()
            if self.on_result is not None:
                self.on_result(result)
        except Exception as e:
            self.failures += 1
            logger.warning("poll_failed", poller=self.name, error=str(e))
            return
        self.completed += 1

    async def _run(self) -> None:
        while True:
            self.tick()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Begin polling; the first tick fires immediately."""
        if self.is_running:
            return
        self._loop_task = asyncio.create_task(self._run())
        logger.info("poller_started", poller=self.name, interval=self.interval)

    async def stop(self) -> None:
        """Stop ticking and wait for a fetch already in flight to finish."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None
        if self._in_flight is not None:
            await self._in_flight
            self._in_flight = None
        logger.info(
            "poller_stopped",
            poller=self.name,
            completed=self.completed,
            failures=self.failures,
            skipped_ticks=self.skipped_ticks,
        )


__all__ = ["LastWriteWinsCache", "Poller"]
