"""Host commands and the reduced control state."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from pycgcountdown._constants import DEFAULT_DURATION, DURATION_KEYS, HIDE_ON_COMPLETE_KEYS
from pycgcountdown.ingestion.normalize import (
    coerce_duration_spec,
    coerce_flag,
    first_present,
    first_truthy,
    is_missing,
)


class HostCommand(enum.StrEnum):
    """Command names the host calls on the template."""

    PLAY = "play"
    UPDATE = "update"
    STOP = "stop"
    NEXT = "next"


class ControlState(BaseModel):
    """Display-relevant state derived from host commands."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    duration_spec: str = DEFAULT_DURATION
    visible: bool = False
    hide_on_complete: bool = True

    def apply(self, patch: ControlPatch) -> ControlState:
        """Return a new state with every field set in *patch* overwritten."""
        return self.model_copy(update=patch.model_dump(exclude_none=True))


class ControlPatch(BaseModel):
    """Subset of :class:`ControlState` fields carried by a single command.

    ``None`` means "not carried"; an empty patch causes no transition.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    duration_spec: str | None = None
    visible: bool | None = None
    hide_on_complete: bool | None = None

    @property
    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ControlPatch:
        """Read the recognised control keys out of a canonical payload.

        ``f0``/``time`` carry the duration (first truthy wins) and
        ``f1``/``hideOnEnd`` the hide-on-complete flag (first present wins,
        even when falsy). All other keys are ignored.
        """
        duration_spec = coerce_duration_spec(first_truthy(payload, DURATION_KEYS))

        hide_on_complete: bool | None = None
        raw_hide = first_present(payload, HIDE_ON_COMPLETE_KEYS)
        if not is_missing(raw_hide):
            hide_on_complete = coerce_flag(raw_hide)

        return cls(duration_spec=duration_spec, hide_on_complete=hide_on_complete)
