from __future__ import annotations


class SequencingError(Exception):
    """Base class for failures the sequencing core reports to its caller."""


class NoValidBookingsError(SequencingError):
    """Raised when an input yields zero valid booking lines."""

    def __init__(self, message: str = "No valid booking lines found.") -> None:
        super().__init__(message)
        self.message = message
