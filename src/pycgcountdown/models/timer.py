"""Countdown timer state and display models."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class ParsedDuration:
    """A duration spec resolved to milliseconds.

    ``show_minutes``/``show_hours`` are ``True`` when the spec itself had a
    minutes/hours segment, which forces that field into the display.
    """

    milliseconds: int
    show_minutes: bool = False
    show_hours: bool = False


@dataclass(slots=True)
class TimerState:
    """Mutable state of one countdown run, owned by the scheduler.

    ``last_tick_at`` is in loop-clock milliseconds and is ``None`` until the
    first tick of the run. ``pending`` is the single outstanding deferred
    tick, if any.
    """

    remaining_ms: int = 0
    running: bool = False
    last_tick_at: float | None = None
    pending: asyncio.TimerHandle | None = None


class CountdownFrame(BaseModel):
    """What the display layer should show right now."""

    model_config = ConfigDict(frozen=True)

    text: str
    remaining_ms: int = Field(..., ge=0)
    visible: bool
