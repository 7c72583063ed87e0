"""Small helpers shared by the command line and tests."""

from .logging import configure_cli_logging, get_logger, level_for_verbosity
from .simulate import poisson_events, uniform_events

__all__ = ["configure_cli_logging", "get_logger", "level_for_verbosity", "poisson_events", "uniform_events"]
