"""Utility modules for reading event streams."""

from .events import EventFileError, load_events

__all__ = ["EventFileError", "load_events"]
