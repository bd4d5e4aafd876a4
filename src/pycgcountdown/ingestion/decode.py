"""Template data decoding.

The host pushes ``update`` payloads in one of three shapes:

* an already structured mapping (passed through untouched),
* JSON object text,
* an XML document rooted at ``<templateData>`` holding
  ``<componentData id="KEY"><data value="VALUE"/></componentData>`` nodes.

Everything is reduced to a flat canonical mapping. Decoding never raises;
malformed input degrades to an empty (or partial, for XML) mapping.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any

from pycgcountdown._constants import COMPONENT_DATA_TAG, DATA_TAG, TEMPLATE_DATA_MARKER
from pycgcountdown._logsafe import clip_for_log
from pycgcountdown.exceptions import TemplateDataError

_logger = logging.getLogger(__name__)

CanonicalPayload = dict[str, Any]
"""Flat key/value mapping; XML yields ``str`` values, JSON any scalar."""


def _reject_constant(name: str) -> Any:
    # Browser JSON has no NaN/Infinity literals.
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_json(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _component_pair(node: ET.Element) -> tuple[str, str] | None:
    key = (node.get("id") or "").strip()
    data_node = next(node.iter(DATA_TAG), None)
    if data_node is None:
        return None
    value = (data_node.get("value") or "").strip()
    if not key or not value:
        return None
    return key, value


def _parse_xml(text: str) -> CanonicalPayload:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise TemplateDataError(f"Malformed template XML: {exc}") from exc

    values: CanonicalPayload = {}
    for node in root.iter(COMPONENT_DATA_TAG):
        pair = _component_pair(node)
        if pair is not None:
            key, value = pair
            values[key] = value
    return values


def _decode_text(text: str) -> CanonicalPayload:
    try:
        parsed = _parse_json(text)
    except ValueError:
        pass
    else:
        if isinstance(parsed, dict):
            return parsed
        _logger.debug("Template JSON is not an object: %s", clip_for_log(parsed))
        return {}

    if text[: len(TEMPLATE_DATA_MARKER)] != TEMPLATE_DATA_MARKER:
        return {}
    return _parse_xml(text)


def decode_template_data(payload: Any) -> CanonicalPayload:
    """Decode host template data into a canonical payload.

    Parameters
    ----------
    payload
        A mapping (returned unchanged), JSON text, or ``<templateData>``
        XML text. Anything else decodes to an empty mapping.

    Returns
    -------
    CanonicalPayload
        Decoded key/value pairs, or ``{}`` when nothing could be read.
    """
    if isinstance(payload, Mapping):
        return payload  # type: ignore[return-value]
    if not isinstance(payload, str):
        return {}
    try:
        values = _decode_text(payload)
    except Exception:
        _logger.debug("Could not decode template data %s", clip_for_log(payload), exc_info=True)
        return {}
    _logger.debug("Decoded template data: %s", clip_for_log(values))
    return values
