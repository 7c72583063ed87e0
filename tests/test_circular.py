from collections import Counter

import numpy as np
import pytest

from spikelag.core import InvalidInputError, circular_lags, compute_lags, lag_vector


def test_reference_example_multiset():
    result = lag_vector([1, 2], [3], 10.0)
    assert Counter(result.tolist()) == Counter([-2, -1, -1, 0, -3, 0, -3, -2])


def test_offsets_are_ascending_and_grouped():
    result = circular_lags([1, 2], [3], 10.0)
    assert result.horizon == 3
    assert result.offsets.tolist() == [0, 0, 1, 1, 2, 2, 3, 3]
    assert result.for_offset(2).tolist() == [-3.0, 0.0]
    assert result.diagnostics["n_offsets"] == 4
    assert result.diagnostics["n_pairs_tested"] == 8
    assert result.diagnostics["n_lags"] == 8


def test_deterministic():
    a = lag_vector([0, 4, 5], [2, 3], 3.0)
    b = lag_vector([0, 4, 5], [2, 3], 3.0)
    np.testing.assert_array_equal(a, b)


def test_threshold_applies_per_offset():
    full = lag_vector([1, 2], [3], 10.0)
    narrow = lag_vector([1, 2], [3], 1.0)
    assert Counter(narrow.tolist()) == Counter(x for x in full.tolist() if abs(x) <= 1.0)


def test_matches_manual_rotation():
    x_i, x_j = [0, 2], [1, 5]
    n = 6
    expected = []
    for offset in range(n):
        u = sorted((e + offset) % n for e in x_i)
        expected.extend(compute_lags(u, sorted(x_j), 2.0).tolist())
    assert lag_vector(x_i, x_j, 2.0).tolist() == expected


def test_horizon_shared_by_both_streams():
    # x_j sets the horizon; x_i still wraps over all six slots
    result = circular_lags([0], [5], 10.0)
    assert result.horizon == 5
    assert sorted(result.lags.tolist()) == [-5.0, -4.0, -3.0, -2.0, -1.0, 0.0]


@pytest.mark.parametrize("x_i, x_j", [([], [1]), ([1], []), ([-1], [2])])
def test_invalid_series(x_i, x_j):
    with pytest.raises(InvalidInputError):
        lag_vector(x_i, x_j, 10.0)


def test_oversized_event_time_rejected():
    with pytest.raises(InvalidInputError):
        lag_vector([1e19], [1], 1.0)
