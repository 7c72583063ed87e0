"""Logging setup for the spikelag command line."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"
VERBOSE_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"

# ``-v`` count to level; anything beyond the last entry stays at DEBUG.
VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count onto a :mod:`logging` level."""

    if verbosity < 0:
        raise ValueError("verbosity must be non-negative")
    return VERBOSITY_LEVELS[min(verbosity, len(VERBOSITY_LEVELS) - 1)]


def get_logger(name: str = "spikelag", level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Return the ``name`` logger writing to the current ``sys.stderr``.

    Only one ``StreamHandler`` is ever attached; later calls point it at the
    current ``sys.stderr`` and update its format, so a swapped stream (as in
    test runners) still receives the records.
    """

    logger = logging.getLogger(name)
    handler = next((h for h in logger.handlers if isinstance(h, logging.StreamHandler)), None)
    if handler is None:
        handler = logging.StreamHandler()
        logger.addHandler(handler)
    handler.setStream(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.setLevel(level)
    return logger


def configure_cli_logging(verbosity: int) -> logging.Logger:
    """Set up the package logger for a CLI run with ``verbosity`` ``-v`` flags."""

    level = level_for_verbosity(verbosity)
    fmt = VERBOSE_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT
    return get_logger("spikelag", level=level, fmt=fmt)
