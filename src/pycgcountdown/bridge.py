"""Host command bridge.

The host drives a template through four global entry points: ``play``,
``update``, ``stop`` and ``next``. The bridge occupies those slots and fans
each call out to any number of listeners, so several consumers can follow
the same command stream. A handler that already sat in a slot before the
bridge was installed is kept as that command's first listener.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, MutableMapping
from typing import Any

from pycgcountdown._logsafe import clip_for_log
from pycgcountdown.exceptions import UnknownCommandError
from pycgcountdown.ingestion.decode import decode_template_data
from pycgcountdown.models.control import HostCommand

_logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


def _coerce_command(command: HostCommand | str) -> HostCommand:
    try:
        return HostCommand(command)
    except ValueError:
        raise UnknownCommandError(str(command)) from None


class CommandBridge:
    """Occupies the host command slots and republishes calls as events.

    Parameters
    ----------
    host
        The host's command surface, mapping command names to callables.
        Defaults to a private dict when the host exposes none.
    placeholder_slots
        Command names whose current occupant is an unimplemented host stub.
        Those occupants are replaced without being chained.
    """

    def __init__(
        self,
        host: MutableMapping[str, Callable[..., Any]] | None = None,
        *,
        placeholder_slots: Iterable[HostCommand | str] = (),
    ) -> None:
        self._host: MutableMapping[str, Callable[..., Any]] = host if host is not None else {}
        self._listeners: dict[HostCommand, list[Listener]] = {command: [] for command in HostCommand}
        placeholders = {_coerce_command(name) for name in placeholder_slots}

        for command in HostCommand:
            existing = self._host.get(command.value)
            if callable(existing) and command not in placeholders:
                _logger.debug("Chaining pre-existing %s handler %r", command.value, existing)
                self.subscribe(command, existing)
            self._host[command.value] = getattr(self, command.value)

    @property
    def host(self) -> MutableMapping[str, Callable[..., Any]]:
        return self._host

    def subscribe(self, command: HostCommand | str, listener: Listener) -> None:
        self._listeners[_coerce_command(command)].append(listener)

    def unsubscribe(self, command: HostCommand | str, listener: Listener) -> None:
        listeners = self._listeners[_coerce_command(command)]
        try:
            listeners.remove(listener)
        except ValueError:
            pass

    def listeners(self, command: HostCommand | str) -> tuple[Listener, ...]:
        return tuple(self._listeners[_coerce_command(command)])

    def emit(self, command: HostCommand | str, *args: Any) -> None:
        """Deliver *command* to every listener in subscription order.

        A failing listener is logged and skipped; the remaining listeners
        still run and nothing propagates to the caller.
        """
        resolved = _coerce_command(command)
        for listener in list(self._listeners[resolved]):
            try:
                listener(*args)
            except Exception:
                _logger.warning("Listener %r for %s failed", listener, resolved.value, exc_info=True)

    # ------------------------------------------------------------------
    # Host entry points
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Called by the host."""
        self.emit(HostCommand.PLAY)

    def stop(self) -> None:
        """Called by the host."""
        self.emit(HostCommand.STOP)

    def update(self, data: Any) -> None:
        """Called by the host with template data (mapping, JSON or XML text)."""
        payload = decode_template_data(data)
        _logger.debug("update %s", clip_for_log(payload))
        self.emit(HostCommand.UPDATE, payload)

    def next(self) -> None:
        """Called by the host."""
        self.emit(HostCommand.NEXT)
