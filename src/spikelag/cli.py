"""Command line interface for spikelag using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import typer
from pydantic import ValidationError

from ._typer import bad_parameter
from .config import Settings, load_settings
from .core import InvalidInputError, circular_lags, compute_lags, discretize, histogram
from .core.histogram import Histogram
from .ingest import EventFileError, load_events
from .types import EventTrain
from .utils.logging import configure_cli_logging
from .utils.simulate import uniform_events

app = typer.Typer(help="Cross-correlation lags and correlograms of two event streams")
logger = logging.getLogger(__name__)


def _parse_override_value(raw: str) -> object:
    lower = raw.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        pass
    if raw.startswith("[") or raw.startswith("{"):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise typer.BadParameter(f"invalid JSON override value: {raw}") from None
    return raw


def _ensure_path(settings: Settings, keys: List[str]) -> None:
    current: object = settings
    for key in keys[:-1]:
        if not hasattr(current, key):
            raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")
        current = getattr(current, key)
    if not hasattr(current, keys[-1]):
        raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")


def _apply_override(data: Dict[str, object], keys: List[str], value: object) -> None:
    target = data
    for key in keys[:-1]:
        existing = target.get(key)
        if not isinstance(existing, dict):
            existing = {}
            target[key] = existing
        target = existing
    target[keys[-1]] = value


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. lags.epsilon=0.05",
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Log run details to stderr; repeat for debug output"
    ),
) -> None:
    """Initialise the Typer context with validated settings."""

    configure_cli_logging(verbose)

    if config is not None and not config.exists():
        raise typer.BadParameter(f"configuration file not found: {config}")

    try:
        settings = load_settings(config) if config else Settings()
    except (FileNotFoundError, RuntimeError, TypeError, json.JSONDecodeError, ValidationError) as exc:
        raise typer.BadParameter(f"failed to load configuration: {exc}") from exc

    if set_overrides:
        data = settings.model_dump()
        for override in set_overrides:
            if "=" not in override:
                raise typer.BadParameter(
                    "overrides must be of the form --set section.key=value"
                )
            key, raw_value = override.split("=", 1)
            if not key:
                raise typer.BadParameter("override key cannot be empty")
            keys = key.split(".")
            _ensure_path(settings, keys)
            value = _parse_override_value(raw_value)
            _apply_override(data, keys, value)
        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            raise typer.BadParameter(f"invalid configuration override: {exc}") from exc

    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    cfg = ctx.obj
    if not isinstance(cfg, Settings):
        cfg = Settings()
        ctx.obj = cfg
    return cfg


def _load_pair(u: Path, v: Path) -> Tuple[EventTrain, EventTrain]:
    try:
        return load_events(u), load_events(v)
    except EventFileError as exc:
        bad_parameter(str(exc))


def _direct_lags(u: EventTrain, v: EventTrain, epsilon: float) -> np.ndarray:
    try:
        return compute_lags(u.times, v.times, epsilon)
    except InvalidInputError as exc:
        bad_parameter(str(exc), param_hint="--epsilon")


def _circular_lags(u: EventTrain, v: EventTrain, epsilon: float, resolution: float) -> np.ndarray:
    """Run the circular collector on discretized times; lags come back in time units."""
    try:
        iu = discretize(u.times, resolution)
        iv = discretize(v.times, resolution)
        result = circular_lags(iu, iv, epsilon / resolution)
    except InvalidInputError as exc:
        bad_parameter(str(exc))
    logger.info(
        "circular: horizon=%d offsets=%d lags=%d",
        result.horizon,
        result.diagnostics["n_offsets"],
        result.diagnostics["n_lags"],
    )
    return result.lags * resolution


def _write_array(values: np.ndarray, output: Path) -> None:
    if output.suffix.lower() == ".csv":
        np.savetxt(output, values, delimiter=",")
    else:
        np.save(output, values)


def _emit(values: np.ndarray, output: Optional[Path]) -> None:
    if output:
        _write_array(values, output)
        typer.echo(f"saved {values.size} lags to {output}")
    else:
        typer.echo(" ".join(f"{x:g}" for x in values))


def _lags_for(
    cfg: Settings,
    u: Path,
    v: Path,
    circular: bool,
    epsilon: Optional[float],
    resolution: Optional[float],
) -> np.ndarray:
    train_u, train_v = _load_pair(u, v)
    if circular:
        eps = cfg.circular.epsilon if epsilon is None else epsilon
        res = cfg.circular.resolution if resolution is None else resolution
        logger.info("circular lags of %s vs %s (epsilon=%g, resolution=%g)", train_u.label, train_v.label, eps, res)
        return _circular_lags(train_u, train_v, eps, res)
    eps = cfg.lags.epsilon if epsilon is None else epsilon
    logger.info("lags of %s vs %s (epsilon=%g)", train_u.label, train_v.label, eps)
    return _direct_lags(train_u, train_v, eps)


def _histogram_for(
    cfg: Settings,
    lags: np.ndarray,
    lo: Optional[float],
    hi: Optional[float],
    width: Optional[float],
) -> Histogram:
    lo = cfg.histogram.lo if lo is None else lo
    hi = cfg.histogram.hi if hi is None else hi
    width = cfg.histogram.bucket_width if width is None else width
    try:
        return histogram(lags, lo, hi, width)
    except InvalidInputError as exc:
        bad_parameter(str(exc))


@app.command()
def lags(
    ctx: typer.Context,
    u: Path = typer.Argument(..., help="Event times of the first stream"),
    v: Path = typer.Argument(..., help="Event times of the second stream"),
    epsilon: Optional[float] = typer.Option(None, "--epsilon", "-e", help="Maximum absolute lag"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Print or save every lag ``u_i - v_j`` with ``|u_i - v_j| <= epsilon``."""

    cfg = _settings(ctx)
    _emit(_lags_for(cfg, u, v, False, epsilon, None), output)


@app.command()
def circular(
    ctx: typer.Context,
    u: Path = typer.Argument(..., help="Event times of the rotated stream"),
    v: Path = typer.Argument(..., help="Event times of the fixed stream"),
    epsilon: Optional[float] = typer.Option(None, "--epsilon", "-e", help="Maximum absolute lag in time units"),
    resolution: Optional[float] = typer.Option(None, "--resolution", "-r", help="Grid slot width in time units"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Print or save the lags of every circular alignment of ``u`` against ``v``.

    Both streams are discretized into slots of width ``--resolution``; the
    resulting lags are reported in the original time units.
    """

    cfg = _settings(ctx)
    _emit(_lags_for(cfg, u, v, True, epsilon, resolution), output)


@app.command()
def hist(
    ctx: typer.Context,
    u: Path = typer.Argument(...),
    v: Path = typer.Argument(...),
    use_circular: bool = typer.Option(False, "--circular/--direct", help="Use the circular lag collector"),
    epsilon: Optional[float] = typer.Option(None, "--epsilon", "-e"),
    resolution: Optional[float] = typer.Option(None, "--resolution", "-r"),
    lo: Optional[float] = typer.Option(None, "--lo"),
    hi: Optional[float] = typer.Option(None, "--hi"),
    width: Optional[float] = typer.Option(None, "--width", "-w"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save bucket counts"),
) -> None:
    """Bin the lags of ``u`` against ``v`` and print one row per bucket."""

    cfg = _settings(ctx)
    values = _lags_for(cfg, u, v, use_circular, epsilon, resolution)
    result = _histogram_for(cfg, values, lo, hi, width)
    for row in result.rows():
        typer.echo(f"[{row['lo']:g}, {row['hi']:g})\t{row['count']}")
    typer.echo(f"total={result.total} dropped={values.size - result.total}")
    if output:
        _write_array(result.counts, output)
        typer.echo(f"saved {result.n_buckets} bucket counts to {output}")


@app.command()
def plot(
    ctx: typer.Context,
    u: Path = typer.Argument(...),
    v: Path = typer.Argument(...),
    use_circular: bool = typer.Option(False, "--circular/--direct"),
    save: Optional[Path] = typer.Option(None, "--save", "-s", help="Write the figure instead of showing it"),
) -> None:
    """Render the correlogram of ``u`` against ``v`` with matplotlib."""

    cfg = _settings(ctx)
    values = _lags_for(cfg, u, v, use_circular, None, None)
    result = _histogram_for(cfg, values, None, None, None)

    from .viz import plot_correlogram

    target = save or cfg.viz.save
    plot_correlogram(result, title=cfg.viz.title, xlabel=cfg.viz.xlabel, save=target)
    if target:
        typer.echo(f"saved correlogram to {target}")


@app.command()
def simulate(
    ctx: typer.Context,
    output: Path = typer.Argument(..., help="Destination .npy or .csv file"),
    n: Optional[int] = typer.Option(None, "--n"),
    duration: Optional[float] = typer.Option(None, "--duration"),
    seed: Optional[int] = typer.Option(None, "--seed"),
) -> None:
    """Write uniformly distributed synthetic event times to ``output``."""

    cfg = _settings(ctx)
    n = cfg.simulate.n if n is None else n
    duration = cfg.simulate.duration if duration is None else duration
    seed = cfg.simulate.seed if seed is None else seed
    try:
        train = uniform_events(n, duration, seed=seed)
    except ValueError as exc:
        bad_parameter(str(exc))
    _write_array(train.times, output)
    typer.echo(f"saved {len(train)} events to {output}")


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
