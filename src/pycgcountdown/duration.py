"""Duration spec parsing and remaining-time formatting.

A duration spec is either whole seconds (``"90"``) or colon separated
``[hh:][mm:]ss`` (``"1:30"``, ``"01:02:03"``). Parsing never fails: text
that does not resolve to a finite number yields a zero duration.
"""

from __future__ import annotations

import math
import re
from typing import Any

from pycgcountdown.ingestion.normalize import safe_number
from pycgcountdown.models.timer import ParsedDuration

_DIGITS_ONLY = re.compile(r"[0-9]+")


def parse_time_string(spec: Any) -> ParsedDuration:
    """Parse a duration spec into milliseconds.

    Examples
    --------
    >>> parse_time_string("90").milliseconds
    90000
    >>> parse_time_string("01:02:03")
    ParsedDuration(milliseconds=3723000, show_minutes=True, show_hours=True)
    """
    text = spec if isinstance(spec, str) else str(spec)

    if _DIGITS_ONLY.fullmatch(text):
        return ParsedDuration(milliseconds=int(text) * 1000)

    show_minutes = False
    show_hours = False
    if ":" in text:
        segments = text.split(":")
        total = safe_number(segments.pop())
        if segments:
            show_minutes = True
            total += safe_number(segments.pop()) * 60
        if segments:
            show_hours = True
            total += safe_number(segments.pop()) * 3600
    else:
        total = safe_number(text)

    milliseconds = total * 1000
    if not math.isfinite(milliseconds) or milliseconds < 0:
        milliseconds = 0
    return ParsedDuration(milliseconds=round(milliseconds), show_minutes=show_minutes, show_hours=show_hours)


def format_remaining(milliseconds: int, *, show_minutes: bool = True, show_hours: bool = False) -> str:
    """Format remaining time as ``[hh:][mm:]ss`` with two-digit fields.

    Seconds are rounded half up. Minutes always wrap at 60 and hours never
    wrap, so durations of an hour or more need ``show_hours``.
    """
    total_seconds = math.floor(max(milliseconds, 0) / 1000 + 0.5)

    seconds = total_seconds % 60
    minutes = (total_seconds // 60) % 60
    hours = total_seconds // 3600

    parts: list[str] = []
    if show_hours:
        parts.append(f"{hours:02d}")
    if show_hours or show_minutes:
        parts.append(f"{minutes:02d}")
    parts.append(f"{seconds:02d}")
    return ":".join(parts)
