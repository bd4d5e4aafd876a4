"""Normalization helpers.

Centralizes the tolerant coercion rules used to read control fields out of
canonical payloads. Hosts send the same field as text, JSON scalars or
booleans depending on the template tooling in use.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

_MISSING = object()


def safe_number(value: Any) -> float:
    """Coerce *value* the way loosely typed template tooling does.

    Surrounding whitespace is ignored and blank text is ``0``. Returns NaN
    when the value is not numeric; callers decide how to degrade.
    """

    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return math.nan
    text = value.strip()
    if not text:
        return 0.0
    if "_" in text or not text.isascii():
        # float() accepts digit separators and non-ASCII digits, host tooling does not.
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def to_text(value: Any) -> str:
    """Render a payload scalar as text (``true``/``false``, ``90`` not ``90.0``)."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def first_truthy(payload: Mapping[str, Any], keys: Iterable[str]) -> Any | None:
    """Return the first truthy value among *keys*, or ``None``."""

    for key in keys:
        value = payload.get(key)
        if value:
            return value
    return None


def first_present(payload: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the value of the first key present in *payload*.

    Falsy values count as present. Returns the module-private ``_MISSING``
    sentinel when none of the keys exist; test it with :func:`is_missing`.
    """

    for key in keys:
        if key in payload:
            return payload[key]
    return _MISSING


def is_missing(value: Any) -> bool:
    return value is _MISSING


def coerce_flag(value: Any) -> bool:
    """Coerce a hide-on-complete style flag.

    Text is ``True`` only when it reads ``"true"`` in any letter case, so
    ``""``, ``"false"``, ``"1"`` and ``"yes"`` are all ``False``. Any other
    value uses plain truthiness.
    """

    if isinstance(value, str):
        lowered = value.lower()
        return bool(value) and lowered == "true" and lowered != "false"
    return bool(value)


def coerce_duration_spec(value: Any) -> str | None:
    """Return the duration spec carried by *value*, or ``None`` if it is empty."""

    if not value:
        return None
    return to_text(value)
