"""Monty Hall Lab - Monte Carlo convergence of the three-door puzzle."""

__version__ = "0.1.0"

from .config import SimulationConfig
from .errors import InvalidArgumentError
from .game import GameState, MontyHallGame
from .metrics import series_to_frame, summarize_series
from .simulator import BatchSummary, MonteCarloSimulator, iter_series, run_batch, run_series
from .trial import TrialOutcome, play_trial, run_trial

__all__ = [
    "BatchSummary",
    "GameState",
    "InvalidArgumentError",
    "MonteCarloSimulator",
    "MontyHallGame",
    "SimulationConfig",
    "TrialOutcome",
    "iter_series",
    "play_trial",
    "run_batch",
    "run_series",
    "run_trial",
    "series_to_frame",
    "summarize_series",
]
