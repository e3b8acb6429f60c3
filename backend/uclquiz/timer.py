"""Logical clocks for a quiz session.

``Countdown`` and ``SessionClock`` hold no threads or tasks; they only move
when told to. ``Ticker`` is the asyncio driver a host uses to feed one-second
ticks into the session controller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Countdown:
    """Per-question countdown decremented once per ``tick()``."""

    def __init__(self, duration: int = 20, low_time_threshold: int = 5):
        if duration <= 0:
            raise ValueError("duration must be positive")
        self.duration = duration
        self.low_time_threshold = low_time_threshold
        self._remaining = duration
        self._running = False

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def running(self) -> bool:
        return self._running

    @property
    def expired(self) -> bool:
        return self._remaining <= 0

    @property
    def is_low_time(self) -> bool:
        return 0 < self._remaining <= self.low_time_threshold

    def start(self) -> None:
        self._remaining = self.duration
        self._running = True

    def cancel(self) -> None:
        self._running = False

    def tick(self) -> Optional[int]:
        """Advance one unit. Returns the new remaining time, or None when not running."""
        if not self._running:
            return None
        self._remaining = max(0, self._remaining - 1)
        if self._remaining == 0:
            self._running = False
        return self._remaining


class SessionClock:
    """Wall clock for a whole session, reported in whole seconds."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    def start(self) -> None:
        self._started_at = self._clock()
        self._stopped_at = None

    def stop(self) -> None:
        if self.running:
            self._stopped_at = self._clock()

    @property
    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return max(0, int(end - self._started_at))


class Ticker:
    """Call ``callback`` every ``interval`` seconds on the running event loop.

    The loop ends when ``cancel()`` is called or the callback returns ``False``.
    """

    def __init__(self, callback: Callable[[], Optional[bool]], interval: float = 1.0):
        self._callback = callback
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "Ticker":
        if self._task is None:
            self._task = asyncio.create_task(self._run())
        return self

    def cancel(self) -> None:
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        if self._task is None:
            return
        await asyncio.gather(self._task, return_exceptions=True)

    async def _run(self) -> None:
        while not self._cancelled:
            await asyncio.sleep(self.interval)
            # cancel() may have been called by another callback while we slept
            if self._cancelled:
                return
            if self._callback() is False:
                logger.debug("ticker stopped by callback")
                return
