"""pycgcountdown - Host-driven countdown timer for video playout templates."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycgcountdown")
except PackageNotFoundError:
    __version__ = "0+local"
from pycgcountdown.bridge import CommandBridge
from pycgcountdown.config import CountdownConfig
from pycgcountdown.duration import format_remaining, parse_time_string
from pycgcountdown.exceptions import (
    CountdownConfigError,
    CountdownError,
    TemplateDataError,
    UnknownCommandError,
)
from pycgcountdown.ingestion import CanonicalPayload, decode_template_data
from pycgcountdown.models import (
    ControlPatch,
    ControlState,
    CountdownFrame,
    HostCommand,
    ParsedDuration,
    TimerState,
)
from pycgcountdown.scheduler import CountdownScheduler
from pycgcountdown.state.reducer import ControlStateReducer
from pycgcountdown.widget import CountdownWidget

__all__ = [
    "__version__",
    "CanonicalPayload",
    "CommandBridge",
    "ControlPatch",
    "ControlState",
    "ControlStateReducer",
    "CountdownConfig",
    "CountdownConfigError",
    "CountdownError",
    "CountdownFrame",
    "CountdownScheduler",
    "CountdownWidget",
    "HostCommand",
    "ParsedDuration",
    "TemplateDataError",
    "TimerState",
    "UnknownCommandError",
    "decode_template_data",
    "format_remaining",
    "parse_time_string",
]
