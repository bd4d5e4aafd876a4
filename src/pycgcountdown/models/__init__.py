"""Typed models for pycgcountdown.

Re-exports the public model classes so callers can write::

    from pycgcountdown.models import ControlState, TimerState
"""

from pycgcountdown.models.control import ControlPatch, ControlState, HostCommand
from pycgcountdown.models.timer import CountdownFrame, ParsedDuration, TimerState

__all__ = [
    "ControlPatch",
    "ControlState",
    "CountdownFrame",
    "HostCommand",
    "ParsedDuration",
    "TimerState",
]
