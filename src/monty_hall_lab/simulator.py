"""Batch Monte Carlo runner with optional parallel execution."""

from __future__ import annotations

import logging
import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import numpy as np
from tqdm import tqdm

from .config import SimulationConfig, check_batch_size, validate_batch_sizes
from .errors import InvalidArgumentError
from .trial import TrialOutcome, play_trial, run_trial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchSummary:
    """Tallies for one batch of trials."""

    batch_size: int
    stay_wins: int
    switch_wins: int

    def __post_init__(self):
        check_batch_size(self.batch_size)
        for name in ("stay_wins", "switch_wins"):
            count = getattr(self, name)
            if not 0 <= count <= self.batch_size:
                raise InvalidArgumentError(
                    f"{name} must be in [0, {self.batch_size}], got {count}"
                )
        if self.stay_wins + self.switch_wins != self.batch_size:
            raise InvalidArgumentError(
                f"stay_wins + switch_wins must equal batch_size {self.batch_size}, "
                f"got {self.stay_wins} + {self.switch_wins}"
            )

    @property
    def stay_win_rate(self) -> float:
        return self.stay_wins / self.batch_size * 100

    @property
    def switch_win_rate(self) -> float:
        return self.switch_wins / self.batch_size * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "batch_size": self.batch_size,
            "stay_wins": self.stay_wins,
            "switch_wins": self.switch_wins,
            "stay_win_rate": self.stay_win_rate,
            "switch_win_rate": self.switch_win_rate,
        }


def _tally(n_trials: int, rng: np.random.Generator) -> tuple[int, int]:
    stay_wins = 0
    switch_wins = 0
    for _ in range(n_trials):
        stay_won, switch_won = run_trial(rng)
        stay_wins += stay_won
        switch_wins += switch_won
    return stay_wins, switch_wins


def _tally_chunk(n_trials: int, seed_seq: np.random.SeedSequence) -> tuple[int, int]:
    """Tally one chunk on its own stream.

    Lives at module level so it can be pickled for spawned workers.
    """
    rng = np.random.Generator(np.random.PCG64(seed_seq))
    return _tally(n_trials, rng)


def chunk_sizes(n_trials: int, n_chunks: int) -> list[int]:
    """Split ``n_trials`` into ``n_chunks`` near-equal parts, remainder first."""
    base_size, remainder = divmod(n_trials, n_chunks)
    sizes = [base_size] * n_chunks
    for i in range(remainder):
        sizes[i] += 1
    return sizes


def _tally_parallel(n_trials: int, n_jobs: int, rng: np.random.Generator) -> tuple[int, int]:
    sizes = [size for size in chunk_sizes(n_trials, n_jobs) if size > 0]

    # Child streams are derived from the caller's generator, so a seeded
    # generator gives the same tallies for the same n_jobs.
    root = np.random.SeedSequence(int(rng.integers(0, 2**32)))
    children = root.spawn(len(sizes))

    stay_wins = 0
    switch_wins = 0
    ctx = mp.get_context("spawn")
    with ProcessPoolExecutor(max_workers=len(sizes), mp_context=ctx) as executor:
        futures = [
            executor.submit(_tally_chunk, size, child)
            for size, child in zip(sizes, children)
        ]
        # Tallies are summed in completion order
        for future in as_completed(futures):
            stay, switch = future.result()
            stay_wins += stay
            switch_wins += switch
    return stay_wins, switch_wins


def run_batch(
    batch_size: int,
    rng: np.random.Generator | None = None,
    n_jobs: int = 1,
) -> BatchSummary:
    """Run ``batch_size`` independent trials and tally both strategies.

    Args:
        batch_size: Number of trials, at least 1
        rng: Random source; a fresh unseeded generator when None
        n_jobs: Worker processes to split the batch across

    Returns:
        BatchSummary for this batch

    Raises:
        InvalidArgumentError: If batch_size is not a positive integer
    """
    batch_size = check_batch_size(batch_size)
    if rng is None:
        rng = np.random.default_rng()

    n_jobs = max(1, min(n_jobs, batch_size))
    if n_jobs == 1:
        stay_wins, switch_wins = _tally(batch_size, rng)
    else:
        stay_wins, switch_wins = _tally_parallel(batch_size, n_jobs, rng)

    summary = BatchSummary(batch_size, stay_wins, switch_wins)
    logger.debug(
        "Batch of %d: stay %.2f%%, switch %.2f%%",
        batch_size, summary.stay_win_rate, summary.switch_win_rate,
    )
    return summary


def iter_series(
    batch_sizes: Iterable[int],
    rng: np.random.Generator | None = None,
    n_jobs: int = 1,
) -> Iterator[BatchSummary]:
    """Yield one summary per batch size, in order, as each batch completes.

    The whole schedule is validated before the first batch runs.
    """
    sizes = validate_batch_sizes(batch_sizes)
    if rng is None:
        rng = np.random.default_rng()
    return (run_batch(size, rng, n_jobs) for size in sizes)


def run_series(
    batch_sizes: Iterable[int],
    rng: np.random.Generator | None = None,
    n_jobs: int = 1,
    show_progress: bool = False,
) -> list[BatchSummary]:
    """Run a batch for every size in ``batch_sizes`` and return the summaries.

    Raises:
        InvalidArgumentError: If any batch size is invalid; nothing is returned
    """
    sizes = validate_batch_sizes(batch_sizes)
    logger.info("Running convergence series over %d batch sizes", len(sizes))

    summaries = iter_series(sizes, rng, n_jobs)
    if show_progress:
        summaries = tqdm(summaries, total=len(sizes), desc="Simulating batches")
    return list(summaries)


class MonteCarloSimulator:
    """Runs trials, batches and series from a SimulationConfig.

    The simulator owns one generator seeded from ``config.base_seed``; every
    call draws from it in sequence.
    """

    def __init__(self, config: SimulationConfig | None = None):
        self.config = config or SimulationConfig()
        self.rng = np.random.default_rng(self.config.base_seed)

    def play_trial(self) -> TrialOutcome:
        return play_trial(self.rng)

    def run_trial(self) -> tuple[bool, bool]:
        return run_trial(self.rng)

    def run_batch(self, batch_size: int) -> BatchSummary:
        return run_batch(batch_size, self.rng, self.config.n_jobs)

    def iter_series(self, batch_sizes: Iterable[int] | None = None) -> Iterator[BatchSummary]:
        if batch_sizes is None:
            batch_sizes = self.config.batch_sizes
        return iter_series(batch_sizes, self.rng, self.config.n_jobs)

    def run_series(self, batch_sizes: Iterable[int] | None = None) -> list[BatchSummary]:
        if batch_sizes is None:
            batch_sizes = self.config.batch_sizes
        return run_series(
            batch_sizes,
            self.rng,
            n_jobs=self.config.n_jobs,
            show_progress=self.config.show_progress,
        )
