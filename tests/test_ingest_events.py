import numpy as np
import pytest

from spikelag.ingest import EventFileError, load_events


def test_load_npy(tmp_path):
    p = tmp_path / "unit1.npy"
    np.save(p, np.array([0.1, 0.5, 0.9]))
    train = load_events(p)
    assert train.label == "unit1"
    np.testing.assert_allclose(train.times, [0.1, 0.5, 0.9])


def test_load_npz_named_key(tmp_path):
    p = tmp_path / "units.npz"
    np.savez(p, a=np.array([1.0]), b=np.array([2.0, 3.0]))
    assert load_events(p).times.tolist() == [1.0]
    assert load_events(p, key="b").times.tolist() == [2.0, 3.0]
    with pytest.raises(EventFileError):
        load_events(p, key="missing")


def test_load_csv_with_header_and_column(tmp_path):
    p = tmp_path / "spikes.csv"
    p.write_text("unit,time\n1,0.25\n1,0.75\n")
    train = load_events(p, column=1, label="u")
    assert train.label == "u"
    assert train.times.tolist() == [0.25, 0.75]


def test_load_whitespace_text(tmp_path):
    p = tmp_path / "spikes.txt"
    p.write_text("1\n2\n3\n")
    assert load_events(p).times.tolist() == [1.0, 2.0, 3.0]


def test_column_out_of_range(tmp_path):
    p = tmp_path / "spikes.csv"
    p.write_text("0.1\n0.2\n")
    with pytest.raises(EventFileError) as excinfo:
        load_events(p, column=3)
    assert str(p) in str(excinfo.value)


def test_missing_file(tmp_path):
    with pytest.raises(EventFileError):
        load_events(tmp_path / "nope.npy")


def test_two_dimensional_npy_rejected(tmp_path):
    p = tmp_path / "grid.npy"
    np.save(p, np.zeros((2, 3)))
    with pytest.raises(EventFileError):
        load_events(p)


def test_loaded_times_are_read_only(tmp_path):
    p = tmp_path / "unit.npy"
    np.save(p, np.array([1.0]))
    train = load_events(p)
    with pytest.raises(ValueError):
        train.times[0] = 2.0


def test_corrupt_npy_raises_event_file_error(tmp_path):
    p = tmp_path / "broken.npy"
    p.write_bytes(b"not an array")
    with pytest.raises(EventFileError) as excinfo:
        load_events(p)
    assert str(p) in str(excinfo.value)


def test_corrupt_npz_raises_event_file_error(tmp_path):
    p = tmp_path / "broken.npz"
    p.write_bytes(b"PK\x03\x04garbage")
    with pytest.raises(EventFileError):
        load_events(p)
