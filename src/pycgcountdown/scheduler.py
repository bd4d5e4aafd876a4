"""Drift-corrected countdown scheduler.

Ticks are deferred on an asyncio event loop with ``call_later`` and timed
with ``loop.time()``. Each tick measures the real time elapsed since the
previous one, subtracts it from the remaining time and picks the next wait
so that ticks stay aligned to the interval grid instead of accumulating
timer jitter.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from pycgcountdown._constants import DEFAULT_INTERVAL_MS
from pycgcountdown.duration import parse_time_string
from pycgcountdown.models.timer import ParsedDuration, TimerState

_logger = logging.getLogger(__name__)


class _DeferLoop(Protocol):
    """The slice of :class:`asyncio.AbstractEventLoop` the scheduler uses."""

    def time(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[..., object], *args: Any) -> asyncio.TimerHandle: ...


def next_tick_delay(elapsed_ms: float, interval_ms: int) -> float:
    """Return the wait (ms) before the next tick after *elapsed_ms* of real time.

    Waits shorter than half an interval are pushed out by a full interval.
    """
    wait = interval_ms - (elapsed_ms % interval_ms)
    if wait < interval_ms / 2.0:
        wait += interval_ms
    return wait


class CountdownScheduler:
    """Counts a duration down to zero with one pending tick at a time.

    ``on_tick(remaining_ms)`` is called on every tick that does not finish
    the run, after the next tick has been scheduled. ``on_complete()`` is
    called exactly once when a run reaches zero.
    """

    def __init__(
        self,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        loop: _DeferLoop | None = None,
        on_tick: Callable[[int], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval_ms = interval_ms
        self._loop = loop
        self.on_tick = on_tick
        self.on_complete = on_complete
        self._state = TimerState()
        self._duration = ParsedDuration(milliseconds=0)

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def duration(self) -> ParsedDuration:
        """The parsed duration of the current run."""
        return self._duration

    @property
    def remaining_ms(self) -> int:
        return self._state.remaining_ms

    @property
    def running(self) -> bool:
        return self._state.running

    def bind_loop(self, loop: _DeferLoop) -> None:
        self._loop = loop

    def _event_loop(self) -> _DeferLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _now_ms(self) -> float:
        return self._event_loop().time() * 1000.0

    def _cancel_pending(self) -> None:
        handle = self._state.pending
        if handle is not None:
            handle.cancel()
            self._state.pending = None

    def arm(self, spec: str, running: bool) -> None:
        """Start a new run from *spec*, cancelling whatever was pending.

        With ``running=False`` the remaining time is reset but nothing is
        scheduled. A running arm without a usable loop raises
        :class:`RuntimeError` and leaves the previous run untouched.
        """
        if running:
            self._event_loop()
        self._cancel_pending()
        self._duration = parse_time_string(spec)
        self._state = TimerState(remaining_ms=self._duration.milliseconds, running=running)
        _logger.debug(
            "Armed countdown spec=%r remaining_ms=%d running=%s",
            spec,
            self._duration.milliseconds,
            running,
        )
        if running:
            self._tick()

    def _tick(self) -> None:
        state = self._state
        now = self._now_ms()
        elapsed = now - state.last_tick_at if state.last_tick_at is not None else 0.0
        delay_ms = next_tick_delay(elapsed, self._interval_ms)

        remaining = max(state.remaining_ms - round(elapsed), 0)
        complete = state.last_tick_at is not None and remaining <= 0

        self._cancel_pending()
        if not complete:
            state.pending = self._event_loop().call_later(delay_ms / 1000.0, self._tick)
        state.last_tick_at = now
        state.remaining_ms = remaining

        if complete:
            state.running = False
            _logger.debug("Countdown complete")
            if self.on_complete is not None:
                self.on_complete()
            return

        if self.on_tick is not None:
            self.on_tick(remaining)

    def teardown(self) -> None:
        """Cancel any pending tick; the scheduler stays idle until re-armed."""
        self._cancel_pending()
        self._state.running = False
