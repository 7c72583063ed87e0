"""Fixed-width histogram aggregation of lag sequences.

Bucket ``k`` covers the half-open interval ``[lo + k*w, lo + (k+1)*w)``.
Values outside ``[lo, hi)`` are dropped rather than reported.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

import numpy as np

from .errors import InvalidInputError

# Absorbs floating point noise in ``(hi - lo) / w`` when it is a whole number.
_BUCKET_TOL = 1e-9


@dataclass(frozen=True, eq=False)
class Histogram:
    """Counts of lags per bucket over ``[lo, hi)``.

    Compares and hashes by value so identical inputs give equal histograms.
    """

    lo: float
    hi: float
    bucket_width: float
    counts: np.ndarray

    def __post_init__(self) -> None:
        counts = np.asarray(self.counts, dtype=np.int64)
        counts.setflags(write=False)
        object.__setattr__(self, "counts", counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Histogram):
            return NotImplemented
        return (
            (self.lo, self.hi, self.bucket_width) == (other.lo, other.hi, other.bucket_width)
            and np.array_equal(self.counts, other.counts)
        )

    def __hash__(self) -> int:
        return hash((self.lo, self.hi, self.bucket_width, self.counts.tobytes()))

    @property
    def n_buckets(self) -> int:
        return int(self.counts.size)

    @property
    def edges(self) -> np.ndarray:
        """Bucket boundaries; ``n_buckets + 1`` values starting at ``lo``."""

        return self.lo + self.bucket_width * np.arange(self.n_buckets + 1)

    @property
    def centers(self) -> np.ndarray:
        edges = self.edges
        return (edges[:-1] + edges[1:]) / 2.0

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def rows(self) -> List[Dict[str, Any]]:
        """Return one ``{"lo", "hi", "count"}`` mapping per bucket."""

        edges = self.edges
        return [
            {"lo": float(edges[k]), "hi": float(edges[k + 1]), "count": int(c)}
            for k, c in enumerate(self.counts)
        ]


def bucket_count(lo: float, hi: float, bucket_width: float) -> int:
    """Return ``ceil((hi - lo) / bucket_width)`` after validating the range."""

    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidInputError("histogram range must be finite")
    if not math.isfinite(bucket_width) or bucket_width <= 0:
        raise InvalidInputError("bucket_width must be positive")
    if hi <= lo:
        raise InvalidInputError("hi must be greater than lo")
    return max(1, math.ceil((hi - lo) / bucket_width - _BUCKET_TOL))


def histogram(
    lags: Sequence[float] | np.ndarray,
    lo: float,
    hi: float,
    bucket_width: float,
) -> Histogram:
    """Bin ``lags`` into equal-width buckets covering ``[lo, hi)``.

    Parameters
    ----------
    lags:
        Any one-dimensional sequence of real lags.  NaN values are dropped
        along with everything outside the range.
    lo, hi:
        Closed lower and open upper bound of the binned range.
    bucket_width:
        Width ``w`` of every bucket.

    Returns
    -------
    Histogram
        Immutable counts with ``ceil((hi - lo) / w)`` buckets.
    """

    n = bucket_count(lo, hi, bucket_width)
    values = np.asarray(lags, dtype=float).reshape(-1)
    inside = values[(values >= lo) & (values < hi)]
    idx = np.floor((inside - lo) / bucket_width).astype(np.int64)
    idx = np.clip(idx, 0, n - 1)
    counts = np.bincount(idx, minlength=n)
    return Histogram(lo=float(lo), hi=float(hi), bucket_width=float(bucket_width), counts=counts)
