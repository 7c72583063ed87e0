import json

import pytest
from pydantic import ValidationError

from spikelag.config import Settings, load_settings


def test_defaults():
    s = Settings()
    assert s.lags.epsilon == 10.0
    assert s.circular.resolution == 1.0
    assert (s.histogram.lo, s.histogram.hi, s.histogram.bucket_width) == (-10.0, 10.0, 1.0)


def test_from_env(monkeypatch):
    monkeypatch.setenv("SPIKELAG_LAGS__EPSILON", "0.05")
    monkeypatch.setenv("SPIKELAG_HISTOGRAM__BUCKET_WIDTH", "0.01")
    s = Settings.from_env()
    assert s.lags.epsilon == 0.05
    assert s.histogram.bucket_width == 0.01


def test_load_settings_json(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"lags": {"epsilon": 2.5}, "histogram": {"lo": -3, "hi": 3}}))
    s = load_settings(p)
    assert s.lags.epsilon == 2.5
    assert s.histogram.lo == -3.0
    assert s.histogram.bucket_width == 1.0


def test_load_settings_rejects_non_mapping(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2]")
    with pytest.raises(TypeError):
        load_settings(p)


def test_invalid_histogram_range():
    with pytest.raises(ValidationError):
        Settings.model_validate({"histogram": {"lo": 1.0, "hi": 0.0}})


def test_negative_epsilon_rejected():
    s = Settings()
    with pytest.raises(ValidationError):
        s.lags.epsilon = -1.0


try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


@pytest.mark.skipif(yaml is None, reason="PyYAML not installed")
def test_load_settings_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("circular:\n  epsilon: 3\n  resolution: 0.5\nviz:\n  title: CCG\n")
    s = load_settings(p)
    assert s.circular.epsilon == 3.0
    assert s.circular.resolution == 0.5
    assert s.viz.title == "CCG"
