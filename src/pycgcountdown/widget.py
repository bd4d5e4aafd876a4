"""Countdown widget: bridge, reducer and scheduler wired together."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, MutableMapping
from typing import Any

from pycgcountdown.bridge import CommandBridge
from pycgcountdown.config import CountdownConfig
from pycgcountdown.duration import format_remaining
from pycgcountdown.models.control import ControlState, HostCommand
from pycgcountdown.models.timer import CountdownFrame
from pycgcountdown.scheduler import CountdownScheduler
from pycgcountdown.state.reducer import ControlStateReducer

_logger = logging.getLogger(__name__)

FrameListener = Callable[[CountdownFrame], None]


class CountdownWidget:
    """A host-driven countdown.

    Usage::

        async with CountdownWidget(config, host=host_commands) as widget:
            widget.subscribe(render)
            ...

    The host then calls ``host_commands["update"](data)``,
    ``host_commands["play"]()`` and so on. Every tick and every control
    change publishes a :class:`CountdownFrame` to subscribers.
    """

    def __init__(
        self,
        config: CountdownConfig | None = None,
        *,
        host: MutableMapping[str, Callable[..., Any]] | None = None,
        placeholder_slots: Iterable[HostCommand | str] = (),
        loop: asyncio.AbstractEventLoop | None = None,
        format_func: Callable[[int], str] | None = None,
    ) -> None:
        self._config = config if config is not None else CountdownConfig()
        self._format_func = format_func
        self._frame_listeners: list[FrameListener] = []
        self._loop = loop
        self._preview_handle: asyncio.TimerHandle | None = None
        self._closed = False

        self._bridge = CommandBridge(host, placeholder_slots=placeholder_slots)
        self._scheduler = CountdownScheduler(
            interval_ms=self._config.interval_ms,
            loop=loop,
            on_tick=self._on_tick,
        )
        self._reducer = ControlStateReducer(
            self._bridge,
            self._scheduler,
            initial=ControlState(
                duration_spec=self._config.default_duration,
                hide_on_complete=self._config.hide_on_complete,
            ),
        )
        self._reducer.subscribe(self._on_control_state)

        # The reducer hooked itself into on_complete; run it first, then the widget's own listeners.
        self._complete_listeners: list[Callable[[], None]] = []
        self._reducer_on_complete = self._scheduler.on_complete
        self._scheduler.on_complete = self._on_complete

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CountdownWidget:
        self.start(asyncio.get_running_loop())
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Bind the event loop and, in preview mode, schedule the defaults."""
        if loop is not None:
            self._loop = loop
            self._scheduler.bind_loop(loop)
        if self._config.preview:
            self.start_preview()

    def start_preview(self, delay: float | None = None) -> None:
        """Push the default duration and ``play`` after *delay* seconds.

        Stands in for the host when the widget runs on its own.
        """
        if self._preview_handle is not None:
            self._preview_handle.cancel()
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        wait = self._config.preview_delay if delay is None else delay
        self._preview_handle = self._loop.call_later(wait, self._emit_preview_defaults)

    def _emit_preview_defaults(self) -> None:
        self._preview_handle = None
        _logger.info("Not driven by a host; previewing %s", self._config.default_duration)
        self._bridge.emit(HostCommand.UPDATE, {"time": self._config.default_duration})
        self._bridge.emit(HostCommand.PLAY)

    def close(self) -> None:
        """Cancel pending ticks and preview; the widget stops reacting to the host."""
        if self._closed:
            return
        self._closed = True
        if self._preview_handle is not None:
            self._preview_handle.cancel()
            self._preview_handle = None
        self._scheduler.teardown()
        self._reducer.detach()
        self._scheduler.on_complete = None
        self._scheduler.on_tick = None

    # ------------------------------------------------------------------
    # Host commands
    # ------------------------------------------------------------------

    def play(self) -> None:
        self._bridge.play()

    def update(self, data: Any) -> None:
        self._bridge.update(data)

    def stop(self) -> None:
        self._bridge.stop()

    def next(self) -> None:
        self._bridge.next()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> CountdownConfig:
        return self._config

    @property
    def bridge(self) -> CommandBridge:
        return self._bridge

    @property
    def scheduler(self) -> CountdownScheduler:
        return self._scheduler

    @property
    def control_state(self) -> ControlState:
        return self._reducer.state

    @property
    def visible(self) -> bool:
        return self._reducer.state.visible

    @property
    def remaining_ms(self) -> int:
        return self._scheduler.remaining_ms

    @property
    def display_text(self) -> str:
        remaining = self._scheduler.remaining_ms
        if self._format_func is not None:
            return self._format_func(remaining)
        duration = self._scheduler.duration
        return format_remaining(
            remaining,
            show_minutes=self._config.show_minutes or duration.show_minutes,
            show_hours=self._config.show_hours or duration.show_hours,
        )

    @property
    def frame(self) -> CountdownFrame:
        return CountdownFrame(text=self.display_text, remaining_ms=self.remaining_ms, visible=self.visible)

    # ------------------------------------------------------------------
    # Frame publishing
    # ------------------------------------------------------------------

    def subscribe(self, listener: FrameListener) -> None:
        self._frame_listeners.append(listener)

    def unsubscribe(self, listener: FrameListener) -> None:
        try:
            self._frame_listeners.remove(listener)
        except ValueError:
            pass

    def add_complete_listener(self, listener: Callable[[], None]) -> None:
        """Call *listener* each time a countdown run reaches zero."""
        self._complete_listeners.append(listener)

    def remove_complete_listener(self, listener: Callable[[], None]) -> None:
        try:
            self._complete_listeners.remove(listener)
        except ValueError:
            pass

    def _publish(self) -> None:
        if not self._frame_listeners:
            return
        frame = self.frame
        for listener in list(self._frame_listeners):
            try:
                listener(frame)
            except Exception:
                _logger.warning("Frame listener %r failed", listener, exc_info=True)

    def _on_tick(self, remaining_ms: int) -> None:
        self._publish()

    def _on_control_state(self, state: ControlState) -> None:
        self._publish()

    def _on_complete(self) -> None:
        before = self._reducer.state
        if self._reducer_on_complete is not None:
            self._reducer_on_complete()
        # A hide-on-complete already published through _on_control_state.
        if self._reducer.state is before:
            self._publish()
        for listener in list(self._complete_listeners):
            try:
                listener()
            except Exception:
                _logger.warning("Completion listener %r failed", listener, exc_info=True)
