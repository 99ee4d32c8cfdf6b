"""A stopwatch-like timer that accumulates elapsed milliseconds."""

from __future__ import annotations

import enum
import time
from typing import Callable, Optional


class TimerState(enum.Enum):
    """The states a Timer can be in."""

    RESET = "reset"
    RUNNING = "running"
    STOPPED = "stopped"


class Timer:
    """Stopwatch timer supporting multiple starts and stops.

    The clock is only consulted when the timer is started, stopped or read
    while running. Readings are truncated to whole milliseconds.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock if clock is not None else time.monotonic
        self._state = TimerState.RESET
        self._accumulated_ms = 0
        self._start_ms: Optional[int] = None

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    @property
    def state(self) -> TimerState:
        """The current state of the timer."""
        return self._state

    def reset(self) -> None:
        """Erase accumulated time and return to the reset state."""
        self._state = TimerState.RESET
        self._accumulated_ms = 0

    def start(self) -> None:
        """Start (or retrigger) the timer; accumulated time is kept."""
        self._state = TimerState.RUNNING
        self._start_ms = self._now_ms()

    def stop(self) -> None:
        """Stop the timer and add the last interval to the accumulated time."""
        if self._start_ms is None:
            raise RuntimeError("timer was never started")
        stop_ms = self._now_ms()
        self._state = TimerState.STOPPED
        self._accumulated_ms += stop_ms - self._start_ms

    def time(self) -> int:
        """Return the total accumulated time in milliseconds."""
        if self._state is not TimerState.RUNNING or self._start_ms is None:
            return self._accumulated_ms
        return self._accumulated_ms + (self._now_ms() - self._start_ms)

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()