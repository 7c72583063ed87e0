"""Lag collection over all circular alignments of two discretized streams.

The first stream is placed on a grid and rotated through every offset of
the shared horizon; the second stays fixed.  For each rotation the occupied
slots are turned back into time indices and compared pairwise against the
fixed stream with :func:`~spikelag.core.pairwise.compute_lags`.

Both streams are grid indices in ``[0, N)`` so raw differences are bounded
by ``N``.  With ``epsilon >= N`` every Cartesian difference of every offset
is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

import numpy as np

from .grid import build_grid, joint_horizon, to_events
from .pairwise import compute_lags
from .shifts import enumerate_shifts

logger = logging.getLogger(__name__)


@dataclass
class CircularLagResult:
    """Lags from every circular alignment of two streams.

    Attributes
    ----------
    lags:
        Concatenated lags in ascending offset order.
    offsets:
        Offset that produced each entry of ``lags``.
    horizon:
        Shared horizon of both grids; grids have ``horizon + 1`` slots.
    diagnostics:
        Counters gathered while collecting.
    """

    lags: np.ndarray
    offsets: np.ndarray
    horizon: int
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    def for_offset(self, offset: int) -> np.ndarray:
        """Return the lags contributed by a single ``offset``."""

        return self.lags[self.offsets == offset]


def circular_lags(
    x_i: Sequence[int] | np.ndarray,
    x_j: Sequence[int] | np.ndarray,
    epsilon: float,
) -> CircularLagResult:
    """Collect thresholded lags of ``x_i`` rotated against a fixed ``x_j``.

    Parameters
    ----------
    x_i:
        Non-negative integer event times of the rotated stream.
    x_j:
        Non-negative integer event times of the fixed stream.
    epsilon:
        Inclusive threshold passed to
        :func:`~spikelag.core.pairwise.compute_lags` for every offset.

    Raises
    ------
    InvalidInputError
        If either stream is empty or holds negative or non-integral times.
    """

    horizon = joint_horizon(x_i, x_j)
    grid_i = build_grid(x_i, horizon)
    grid_j = build_grid(x_j, horizon)
    n_slots = horizon + 1

    v = to_events(grid_j)
    chunks = []
    offset_chunks = []
    n_pairs = 0
    shifted = enumerate_shifts(grid_i, range(n_slots))
    for offset, rotated in zip(shifted.offsets, shifted):
        u = to_events(rotated)
        lags = compute_lags(u, v, epsilon)
        n_pairs += u.size * v.size
        chunks.append(lags)
        offset_chunks.append(np.full(lags.size, offset, dtype=np.int64))

    lags = np.concatenate(chunks) if chunks else np.empty(0, dtype=float)
    offsets = np.concatenate(offset_chunks) if offset_chunks else np.empty(0, dtype=np.int64)

    diagnostics = {
        "epsilon": epsilon,
        "n_offsets": n_slots,
        "n_pairs_tested": n_pairs,
        "n_lags": int(lags.size),
    }
    logger.debug(
        "circular lags: horizon=%d offsets=%d pairs=%d kept=%d",
        horizon,
        n_slots,
        n_pairs,
        lags.size,
    )
    return CircularLagResult(lags=lags, offsets=offsets, horizon=horizon, diagnostics=diagnostics)


def lag_vector(
    x_i: Sequence[int] | np.ndarray,
    x_j: Sequence[int] | np.ndarray,
    epsilon: float,
) -> np.ndarray:
    """Return only the lag sequence of :func:`circular_lags`."""

    return circular_lags(x_i, x_j, epsilon).lags
