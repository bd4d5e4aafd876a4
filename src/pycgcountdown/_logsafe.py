"""Helpers for compact debug logging.

Template data pushed by the host can be arbitrarily large (a whole XML
document per ``update``). This module clips values before they are
emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def clip_for_log(value: Any, *, max_string: int = 256, max_items: int = 32, _depth: int = 0) -> Any:
    """Return a clipped copy of *value* suitable for debug logs."""
    if _depth > 8:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<{len(value) - max_string} more chars>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        clipped: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                clipped["…"] = f"<{len(value) - max_items} more keys>"
                break
            clipped[str(k)] = clip_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return clipped

    if isinstance(value, Sequence):
        items = [
            clip_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1) for v in value[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more items>")
        return items

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
