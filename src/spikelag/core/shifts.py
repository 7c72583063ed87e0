"""Circular shifts of occupancy grids."""

from __future__ import annotations

import math
from collections.abc import Sequence as SequenceABC
from typing import Iterator, Sequence, overload

import numpy as np

from .errors import InvalidInputError


def _as_offset(offset: int) -> int:
    if isinstance(offset, (bool, np.bool_)) or not isinstance(offset, (int, float, np.integer, np.floating)):
        raise InvalidInputError(f"offset must be an integer, got {offset!r}")
    if isinstance(offset, (float, np.floating)) and not (math.isfinite(offset) and offset == math.floor(offset)):
        raise InvalidInputError(f"offset must be an integer, got {offset!r}")
    return int(offset)


def shift(grid: Sequence[int] | np.ndarray, offset: int) -> np.ndarray:
    """Rotate ``grid`` so the element at ``k`` lands on ``(k + offset) % len(grid)``.

    Negative offsets rotate the other way.  A new array is always returned.
    """

    arr = np.asarray(grid)
    if arr.ndim != 1:
        raise InvalidInputError("grid must be one-dimensional")
    offset = _as_offset(offset)
    if arr.size == 0:
        return arr.copy()
    return np.roll(arr, offset % arr.size)


class ShiftSequence(SequenceABC):
    """Lazy sequence of rotated copies of one grid.

    Each element is computed on access from the source grid and its offset,
    so elements are independent of each other and the sequence can be
    iterated any number of times.
    """

    def __init__(self, grid: np.ndarray, offsets: Sequence[int]) -> None:
        self._grid = np.array(grid, copy=True)
        self._grid.setflags(write=False)
        self._offsets = tuple(_as_offset(o) for o in offsets)

    @property
    def offsets(self) -> tuple[int, ...]:
        return self._offsets

    def __len__(self) -> int:
        return len(self._offsets)

    @overload
    def __getitem__(self, index: int) -> np.ndarray: ...

    @overload
    def __getitem__(self, index: slice) -> "ShiftSequence": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return ShiftSequence(self._grid, self._offsets[index])
        return shift(self._grid, self._offsets[index])

    def __iter__(self) -> Iterator[np.ndarray]:
        for offset in self._offsets:
            yield shift(self._grid, offset)

    def __repr__(self) -> str:
        return f"ShiftSequence(length={self._grid.size}, n_offsets={len(self._offsets)})"


def enumerate_shifts(
    grid: Sequence[int] | np.ndarray,
    shift_range: Sequence[int] | None = None,
) -> ShiftSequence:
    """Return one rotated grid per offset in ``shift_range``.

    ``shift_range`` defaults to ``range(len(grid))``, i.e. full periodic
    coverage.  Order follows ``shift_range``.
    """

    arr = np.asarray(grid)
    if arr.ndim != 1:
        raise InvalidInputError("grid must be one-dimensional")
    if shift_range is None:
        shift_range = range(arr.size)
    return ShiftSequence(arr, shift_range)
