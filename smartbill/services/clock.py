"""Tick sources for billing periods.

The host environment owns time. Billing code only ever reads ``now()``; the
only writer is whoever drives the clock (the host, or a test).
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from smartbill.core.config import ClockSettings


logger = logging.getLogger(__name__)


class Clock(Protocol):
    """Monotonically non-decreasing tick counter."""

    def now(self) -> int:
        ...


class ManualClock:
    """A clock that moves only when the host advances it."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start tick must be non-negative")
        self._tick = start

    def now(self) -> int:
        return self._tick

    def advance(self, ticks: int = 1) -> int:
        if ticks < 0:
            raise ValueError("clock cannot move backwards")
        self._tick += ticks
        logger.debug(f"Clock advanced by {ticks} to {self._tick}")
        return self._tick

    def set(self, tick: int) -> int:
        if tick < self._tick:
            raise ValueError(f"clock cannot move backwards from {self._tick} to {tick}")
        self._tick = tick
        return self._tick


class WallClock:
    """Ticks derived from elapsed wall time, ``tick_seconds`` per tick."""

    def __init__(
        self,
        tick_seconds: int,
        genesis_tick: int = 0,
        timer: Callable[[], float] = time.time,
    ) -> None:
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")
        self.tick_seconds = tick_seconds
        self.genesis_tick = genesis_tick
        self._timer = timer
        self._last = genesis_tick

    def now(self) -> int:
        tick = self.genesis_tick + int(self._timer() // self.tick_seconds)
        # Never report a smaller tick than one already handed out
        self._last = max(self._last, tick)
        return self._last


def build_clock(config: ClockSettings) -> Clock:
    """Create the clock selected by ``settings.clock.backend``."""

    if config.backend == "manual":
        return ManualClock(config.genesis_tick)
    return WallClock(config.tick_seconds, config.genesis_tick)
