"""Control state reducer.

This is the only component allowed to change :class:`ControlState`. It
follows the bridge's ``play``/``stop``/``update`` events, and re-arms the
scheduler whenever the duration or visibility is (re)asserted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pycgcountdown.bridge import CommandBridge
from pycgcountdown.models.control import ControlPatch, ControlState, HostCommand
from pycgcountdown.scheduler import CountdownScheduler

_logger = logging.getLogger(__name__)

StateListener = Callable[[ControlState], None]


class ControlStateReducer:
    """Reduce bridged host commands into a :class:`ControlState`."""

    def __init__(
        self,
        bridge: CommandBridge,
        scheduler: CountdownScheduler,
        *,
        initial: ControlState | None = None,
    ) -> None:
        self._bridge = bridge
        self._scheduler = scheduler
        self._state = initial if initial is not None else ControlState()
        self._listeners: list[StateListener] = []

        bridge.subscribe(HostCommand.PLAY, self._on_play)
        bridge.subscribe(HostCommand.STOP, self._on_stop)
        bridge.subscribe(HostCommand.UPDATE, self._on_update)
        scheduler.on_complete = self._on_countdown_complete

        self._arm()

    @property
    def state(self) -> ControlState:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def detach(self) -> None:
        """Stop following the bridge and the scheduler."""
        self._bridge.unsubscribe(HostCommand.PLAY, self._on_play)
        self._bridge.unsubscribe(HostCommand.STOP, self._on_stop)
        self._bridge.unsubscribe(HostCommand.UPDATE, self._on_update)
        if self._scheduler.on_complete == self._on_countdown_complete:
            self._scheduler.on_complete = None

    def apply(self, patch: ControlPatch, *, rearm: bool) -> bool:
        """Apply *patch*; return ``False`` when it carried nothing."""
        if patch.is_empty:
            return False
        state = self._state.apply(patch)
        # Arm before committing so a failed arm leaves the old state in place.
        if rearm:
            self._arm(state)
        self._state = state
        _logger.debug("Control state %s", self._state)
        self._notify()
        return True

    def _arm(self, state: ControlState | None = None) -> None:
        state = state if state is not None else self._state
        self._scheduler.arm(state.duration_spec, state.visible)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                _logger.warning("Control state listener %r failed", listener, exc_info=True)

    def _on_play(self) -> None:
        self.apply(ControlPatch(visible=True), rearm=True)

    def _on_stop(self) -> None:
        self.apply(ControlPatch(visible=False), rearm=True)

    def _on_update(self, payload: Mapping[str, Any]) -> None:
        patch = ControlPatch.from_payload(payload)
        self.apply(patch, rearm=patch.duration_spec is not None)

    def _on_countdown_complete(self) -> None:
        if self._state.hide_on_complete:
            self.apply(ControlPatch(visible=False), rearm=self._state.visible)
