"""Ingestion layer.

This package contains the adapters that turn template data pushed by the
host (structured objects, JSON text, XML text) into canonical payloads,
and the coercion helpers that read control fields out of them.
"""

from pycgcountdown.ingestion.decode import CanonicalPayload, decode_template_data

__all__ = ["CanonicalPayload", "decode_template_data"]
