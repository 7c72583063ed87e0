"""Loader for event time files.

Supported layouts:

A) ``.npy``: a one-dimensional array of event times.
B) ``.npz``: the array stored under ``key`` or, when omitted, the first one.
C) ``.csv`` / ``.txt``: one time per line, or several comma or whitespace
   separated columns of which ``column`` is selected.  A single non-numeric
   header line is skipped.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Optional, Union

import numpy as np

from ..types import EventTrain

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class EventFileError(ValueError):
    """Raised when an event file cannot be interpreted."""


def _has_header(first_line: str) -> bool:
    token = first_line.replace(",", " ").split()
    if not token:
        return False
    try:
        float(token[0])
    except ValueError:
        return True
    return False


def _load_text(path: Path, column: Optional[int]) -> np.ndarray:
    with open(path, "r", encoding="utf8") as fh:
        first = fh.readline()
    delimiter = "," if "," in first else None
    skip = 1 if _has_header(first) else 0
    try:
        data = np.loadtxt(path, delimiter=delimiter, skiprows=skip, ndmin=2)
    except ValueError as exc:
        raise EventFileError(f"{path}: {exc}") from exc
    if data.size == 0:
        return np.empty(0, dtype=float)
    col = 0 if column is None else column
    if not -data.shape[1] <= col < data.shape[1]:
        raise EventFileError(f"{path}: column {col} out of range for {data.shape[1]} columns")
    return data[:, col]


def _load_binary(path: Path, key: Optional[str]) -> np.ndarray:
    try:
        if path.suffix.lower() == ".npy":
            return np.load(path)
        with np.load(path) as archive:
            names = list(archive.files)
            if not names:
                raise EventFileError(f"{path}: archive contains no arrays")
            name = key if key is not None else names[0]
            if name not in names:
                raise EventFileError(f"{path}: no array named {name!r}")
            return archive[name]
    except EventFileError:
        raise
    except (ValueError, OSError, EOFError, zipfile.BadZipFile) as exc:
        raise EventFileError(f"{path}: {exc}") from exc


def load_events(
    path: PathLike,
    *,
    column: Optional[int] = None,
    key: Optional[str] = None,
    label: Optional[str] = None,
) -> EventTrain:
    """Load a single event stream from ``path``.

    Parameters
    ----------
    path:
        File to read; the suffix selects the layout.
    column:
        Column of a delimited text file holding the event times.
    key:
        Array name inside an ``.npz`` archive.
    label:
        Display label; defaults to the file stem.
    """

    p = Path(path)
    if not p.exists():
        raise EventFileError(f"{p}: file not found")

    suffix = p.suffix.lower()
    if suffix in {".npy", ".npz"}:
        times = _load_binary(p, key)
    else:
        times = _load_text(p, column)

    times = np.asarray(times)
    if times.ndim != 1:
        times = times.reshape(-1) if 1 in times.shape else times
    if times.ndim != 1:
        raise EventFileError(f"{p}: expected a one-dimensional array, got shape {times.shape}")
    if not np.issubdtype(times.dtype, np.number):
        raise EventFileError(f"{p}: event times must be numeric")

    logger.debug("loaded %d events from %s", times.size, p)
    return EventTrain(times.astype(float), label=label or p.stem, meta={"path": str(p)})
