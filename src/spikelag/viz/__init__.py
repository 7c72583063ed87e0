"""Rendering helpers for correlograms."""

from .correlogram import plot_correlogram, plot_histogram
from .styles import apply_style

__all__ = ["apply_style", "plot_correlogram", "plot_histogram"]
