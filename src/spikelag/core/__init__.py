"""Core algorithms and data structures for spikelag."""

from .errors import InvalidInputError
from .pairwise import compute_lags
from .grid import build_grid, discretize, joint_horizon, to_events
from .shifts import ShiftSequence, enumerate_shifts, shift
from .circular import CircularLagResult, circular_lags, lag_vector
from .histogram import Histogram, bucket_count, histogram

__all__ = [
    "InvalidInputError",
    "compute_lags",
    "build_grid",
    "discretize",
    "joint_horizon",
    "to_events",
    "ShiftSequence",
    "enumerate_shifts",
    "shift",
    "CircularLagResult",
    "circular_lags",
    "lag_vector",
    "Histogram",
    "bucket_count",
    "histogram",
]
