"""Common type helpers for spikelag."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True, eq=False)
class EventTrain:
    """Event times of a single source together with a display label."""

    times: np.ndarray
    label: str = ""
    meta: dict = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        times = np.asarray(self.times, dtype=float)
        if times.ndim != 1:
            raise ValueError("times must be one-dimensional")
        times.setflags(write=False)
        object.__setattr__(self, "times", times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventTrain):
            return NotImplemented
        return self.label == other.label and np.array_equal(self.times, other.times)

    def __hash__(self) -> int:
        return hash((self.label, tuple(self.times.tolist())))

    def __len__(self) -> int:
        return int(self.times.size)

    @property
    def span(self) -> float:
        """Return the time between the first and last event."""

        if self.times.size == 0:
            return 0.0
        return float(self.times.max() - self.times.min())
