# app_core/errors.py
from __future__ import annotations


class SignalLoadError(Exception):
    """Base for failures that end a load attempt. The message is shown to the user as-is."""

    default_message = "Could not load signal data."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NetworkError(SignalLoadError):
    """Fetch failed or the server answered with a non-success status."""

    default_message = "Could not download the signal CSV."


class InsufficientData(SignalLoadError):
    """The CSV has fewer than two lines (no header + data)."""

    default_message = "The signal CSV has no data rows."


class NoValidRows(SignalLoadError):
    """Every data row was dropped while parsing."""

    default_message = "No valid data rows could be parsed from the signal CSV."
