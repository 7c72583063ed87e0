import numpy as np
import pytest

from spikelag.core import Histogram, InvalidInputError, bucket_count, histogram


def test_reference_histogram():
    result = histogram([-3, -1, 0, 0, 2], lo=-5, hi=5, bucket_width=1)
    assert result.n_buckets == 10
    assert result.total == 5
    expected = np.zeros(10, dtype=int)
    expected[[2, 4, 7]] = 1
    expected[5] = 2
    np.testing.assert_array_equal(result.counts, expected)


def test_half_open_buckets():
    result = histogram([0.0, 0.999, 1.0, 2.0], lo=0.0, hi=2.0, bucket_width=1.0)
    assert result.counts.tolist() == [2, 1]


def test_all_out_of_range_is_zero():
    result = histogram([-10.0, 5.0, 7.5], lo=-5, hi=5, bucket_width=1)
    assert result.total == 0
    assert not result.counts.any()


def test_nan_dropped():
    result = histogram([np.nan, 0.5], lo=0, hi=1, bucket_width=0.5)
    assert result.counts.tolist() == [0, 1]


def test_partial_last_bucket():
    result = histogram([2.4, 2.6], lo=0, hi=2.5, bucket_width=1.0)
    assert result.n_buckets == 3
    assert result.counts.tolist() == [0, 0, 1]


def test_bucket_count_tolerates_rounding():
    assert bucket_count(0.0, 0.3, 0.1) == 3
    assert bucket_count(-1.0, 1.0, 0.2) == 10


def test_edges_and_centers():
    result = histogram([], lo=-1, hi=1, bucket_width=0.5)
    np.testing.assert_allclose(result.edges, [-1.0, -0.5, 0.0, 0.5, 1.0])
    np.testing.assert_allclose(result.centers, [-0.75, -0.25, 0.25, 0.75])


def test_rows():
    result = histogram([0.2], lo=0, hi=1, bucket_width=0.5)
    assert result.rows() == [
        {"lo": 0.0, "hi": 0.5, "count": 1},
        {"lo": 0.5, "hi": 1.0, "count": 0},
    ]


def test_histogram_is_immutable():
    result = histogram([0.0], lo=0, hi=1, bucket_width=1)
    with pytest.raises(ValueError):
        result.counts[0] = 5
    with pytest.raises(AttributeError):
        result.lo = 3.0  # type: ignore[misc]
    assert isinstance(result, Histogram)


@pytest.mark.parametrize(
    "lo, hi, width",
    [(0, 1, 0), (0, 1, -1), (1, 1, 0.5), (2, 1, 0.5), (0, float("inf"), 1)],
)
def test_invalid_parameters(lo, hi, width):
    with pytest.raises(InvalidInputError):
        histogram([0.0], lo, hi, width)


def test_identical_histograms_compare_equal():
    a = histogram([0.0, 1.0], 0, 2, 1)
    b = histogram([0.0, 1.0], 0, 2, 1)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != histogram([0.0, 0.0], 0, 2, 1)
    assert a != histogram([0.0, 1.0], 0, 2, 0.5)
