"""Binary occupancy grids over a discretized time axis.

A grid is a one-dimensional ``int8`` array of length ``horizon + 1`` in
which slot ``t`` is ``1`` iff an event occurred at time index ``t``.  When
two streams are compared their grids must share the same horizon, which is
why :func:`joint_horizon` takes every participating series at once.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .errors import InvalidInputError

# First value that no longer fits an int64 index.
_INDEX_LIMIT = 2.0 ** 63


def _as_indices(events: Sequence[int] | np.ndarray, name: str = "events") -> np.ndarray:
    """Validate ``events`` as non-negative integral times and return ``int64``."""
    arr = np.asarray(events)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional")
    if arr.size == 0:
        return np.empty(0, dtype=np.int64)
    if not np.issubdtype(arr.dtype, np.number) or np.issubdtype(arr.dtype, np.complexfloating):
        raise InvalidInputError(f"{name} must contain numeric event times")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} must contain finite event times")
    if np.any(arr < 0):
        raise InvalidInputError(f"{name} must not contain negative event times")
    if np.any(arr != np.floor(arr)):
        raise InvalidInputError(f"{name} must contain integral event times")
    if np.any(arr >= _INDEX_LIMIT):
        raise InvalidInputError(f"{name} contains event times too large to index")
    return arr.astype(np.int64)


def _as_horizon(horizon: int) -> int:
    """Validate ``horizon`` as a non-negative integral grid index."""
    if isinstance(horizon, (bool, np.bool_)):
        valid = False
    elif isinstance(horizon, (int, np.integer)):
        valid = 0 <= horizon < _INDEX_LIMIT
    elif isinstance(horizon, (float, np.floating)):
        valid = math.isfinite(horizon) and 0 <= horizon < _INDEX_LIMIT and horizon == math.floor(horizon)
    else:
        valid = False
    if not valid:
        raise InvalidInputError("horizon must be a non-negative integer")
    return int(horizon)


def joint_horizon(*series: Sequence[int] | np.ndarray) -> int:
    """Return the largest event index across all ``series``.

    Every series must be non-empty; otherwise no horizon can be inferred.
    """

    if not series:
        raise InvalidInputError("at least one event series is required")
    horizon = 0
    for i, events in enumerate(series):
        arr = _as_indices(events, name=f"series {i}")
        if arr.size == 0:
            raise InvalidInputError(f"series {i} is empty; horizon is undefined")
        horizon = max(horizon, int(arr.max()))
    return horizon


def build_grid(events: Sequence[int] | np.ndarray, horizon: int) -> np.ndarray:
    """Return the occupancy vector of ``events`` with length ``horizon + 1``.

    Duplicate event times are idempotent.  An empty ``events`` produces an
    all-zero grid since the horizon is supplied explicitly.
    """

    horizon = _as_horizon(horizon)

    idx = _as_indices(events)
    if idx.size and int(idx.max()) > horizon:
        raise InvalidInputError(
            f"event time {int(idx.max())} lies beyond horizon {horizon}"
        )
    grid = np.zeros(horizon + 1, dtype=np.int8)
    grid[idx] = 1
    return grid


def to_events(grid: Sequence[int] | np.ndarray) -> np.ndarray:
    """Return the ascending indices of all occupied slots in ``grid``."""

    arr = np.asarray(grid)
    if arr.ndim != 1:
        raise InvalidInputError("grid must be one-dimensional")
    if arr.size and not np.all((arr == 0) | (arr == 1)):
        raise InvalidInputError("grid must only contain 0 and 1")
    return np.flatnonzero(arr).astype(np.int64)


def discretize(times: Sequence[float] | np.ndarray, resolution: float) -> np.ndarray:
    """Map real-valued event times onto grid slots of width ``resolution``.

    Slot ``k`` covers ``[k * resolution, (k + 1) * resolution)``.
    """

    if not np.isfinite(resolution) or resolution <= 0:
        raise InvalidInputError("resolution must be a positive number")
    arr = np.asarray(times, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError("times must be one-dimensional")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("times must be finite")
    if np.any(arr < 0):
        raise InvalidInputError("times must not be negative")
    return np.floor(arr / resolution).astype(np.int64)
