"""Thresholded pairwise differences between two event streams.

Every event of the first stream is compared against every event of the
second.  Differences ``u_i - v_j`` whose magnitude does not exceed
``epsilon`` are kept, in ``u``-outer / ``v``-inner order, so that two runs
on identical input produce identical output.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import InvalidInputError


def _as_series(values: Sequence[float] | np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional")
    return arr


def compute_lags(
    u: Sequence[float] | np.ndarray,
    v: Sequence[float] | np.ndarray,
    epsilon: float,
) -> np.ndarray:
    """Return all differences ``u_i - v_j`` with ``|u_i - v_j| <= epsilon``.

    Parameters
    ----------
    u, v:
        Event times of the two streams.  Neither needs to be sorted or
        unique.  Empty input yields an empty result.
    epsilon:
        Inclusive threshold on the absolute lag.  There is no implicit
        default; callers thread it through from their own configuration.

    Returns
    -------
    numpy.ndarray
        Float array of at most ``len(u) * len(v)`` lags.
    """

    if np.isnan(epsilon) or epsilon < 0:
        raise InvalidInputError("epsilon must be a non-negative number")

    a = _as_series(u, "u")
    b = _as_series(v, "v")
    if a.size == 0 or b.size == 0:
        return np.empty(0, dtype=float)

    diffs = np.subtract.outer(a, b).ravel()
    return diffs[np.abs(diffs) <= epsilon]
