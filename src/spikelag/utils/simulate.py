"""Synthetic event streams for demos and tests."""

from __future__ import annotations

import numpy as np

from ..types import EventTrain


def uniform_events(n: int, duration: float, seed: int | None = None, label: str = "uniform") -> EventTrain:
    """Return ``n`` event times drawn uniformly from ``[0, duration)``.

    Times are sorted; ``seed`` makes the draw reproducible.
    """

    if n < 0:
        raise ValueError("n must be non-negative")
    if duration <= 0:
        raise ValueError("duration must be positive")
    rng = np.random.default_rng(seed)
    times = np.sort(rng.random(n) * duration)
    return EventTrain(times, label=label, meta={"n": n, "duration": duration, "seed": seed})


def poisson_events(rate: float, duration: float, seed: int | None = None, label: str = "poisson") -> EventTrain:
    """Return a homogeneous Poisson process of ``rate`` events per unit time."""

    if rate < 0:
        raise ValueError("rate must be non-negative")
    if duration <= 0:
        raise ValueError("duration must be positive")
    rng = np.random.default_rng(seed)
    n = int(rng.poisson(rate * duration))
    times = np.sort(rng.random(n) * duration)
    return EventTrain(times, label=label, meta={"rate": rate, "duration": duration, "seed": seed})
