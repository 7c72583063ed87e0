"""Configuration utilities for spikelag.

This module defines a hierarchical configuration schema using Pydantic models.
The :class:`Settings` container groups the lag threshold, the circular grid
resolution, histogram ranges, synthetic data options and plot options.
Instances can be populated from environment variables or from YAML/JSON files
with matching nested keys.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import EnvSettingsSource

try:  # pragma: no cover - optional dependency
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class LagSettings(SectionModel):
    """Threshold for the direct pairwise lag computation."""

    epsilon: float = 10.0

    @field_validator("epsilon")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if math.isnan(value) or value < 0:
            raise ValueError("epsilon must be non-negative")
        return value


class CircularSettings(LagSettings):
    """Threshold and grid resolution for the circular lag computation."""

    resolution: float = 1.0

    @field_validator("resolution")
    @classmethod
    def _positive(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("resolution must be positive")
        return value


class HistogramSettings(SectionModel):
    """Range and bucket width of the correlogram."""

    lo: float = -10.0
    hi: float = 10.0
    bucket_width: float = 1.0

    @model_validator(mode="after")
    def _check_range(self) -> "HistogramSettings":
        if self.bucket_width <= 0:
            raise ValueError("bucket_width must be positive")
        if self.hi <= self.lo:
            raise ValueError("hi must be greater than lo")
        return self


class SimulateSettings(SectionModel):
    """Parameters for synthetic event streams."""

    n: int = 1000
    duration: float = 2.0
    seed: int | None = 0


class VizSettings(SectionModel):
    """Configuration for the correlogram renderer."""

    title: str = "Cross-correlogram"
    xlabel: str = "Lag"
    save: str | None = None


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    lags: LagSettings = Field(default_factory=LagSettings)
    circular: CircularSettings = Field(default_factory=CircularSettings)
    histogram: HistogramSettings = Field(default_factory=HistogramSettings)
    simulate: SimulateSettings = Field(default_factory=SimulateSettings)
    viz: VizSettings = Field(default_factory=VizSettings)

    model_config = SettingsConfigDict(
        env_prefix="SPIKELAG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        class LenientEnvSettingsSource(EnvSettingsSource):
            def decode_complex_value(self, field_name, target_field, value):  # type: ignore[override]
                try:
                    return super().decode_complex_value(field_name, target_field, value)
                except json.JSONDecodeError:
                    return value

        env_settings.__class__ = LenientEnvSettingsSource
        return init_settings, env_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``SPIKELAG_*`` environment variables only."""

        return cls()


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required to load YAML files")
        data: Any = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)
