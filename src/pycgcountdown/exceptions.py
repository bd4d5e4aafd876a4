"""Custom exception hierarchy for pycgcountdown."""

from __future__ import annotations


class CountdownError(Exception):
    """Base exception for all pycgcountdown errors."""


class CountdownConfigError(CountdownError):
    """Invalid or missing configuration."""


class TemplateDataError(CountdownError):
    """Template data could not be decoded.

    Raised internally by the decoder helpers and always caught by
    :func:`pycgcountdown.ingestion.decode.decode_template_data`, which
    degrades to an empty payload instead.
    """


class UnknownCommandError(CountdownError):
    """A command name outside ``play``/``update``/``stop``/``next`` was used."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown host command: {command!r}")
