"""Exceptions raised by the lag computation core."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a core routine receives input it cannot interpret.

    Covers empty required sequences, negative or non-integral grid times,
    non-positive bucket widths and malformed histogram ranges.
    """
