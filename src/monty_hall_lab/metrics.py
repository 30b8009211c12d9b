"""Convergence metrics for simulated batches."""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from .simulator import BatchSummary

THEORETICAL_STAY_RATE = 100 / 3
THEORETICAL_SWITCH_RATE = 200 / 3

SERIES_COLUMNS = [
    "batch_size",
    "stay_wins",
    "switch_wins",
    "stay_win_rate",
    "switch_win_rate",
    "stay_error",
    "switch_error",
]


def convergence_error(summary: BatchSummary) -> dict[str, float]:
    """Absolute distance, in percentage points, from the theoretical rates."""
    return {
        "stay_error": abs(summary.stay_win_rate - THEORETICAL_STAY_RATE),
        "switch_error": abs(summary.switch_win_rate - THEORETICAL_SWITCH_RATE),
    }


def series_to_frame(series: Sequence[BatchSummary]) -> pd.DataFrame:
    """Tabulate a convergence series, one row per batch in series order."""
    rows = [{**summary.to_dict(), **convergence_error(summary)} for summary in series]
    return pd.DataFrame(rows, columns=SERIES_COLUMNS)


def summarize_series(series: Sequence[BatchSummary]) -> dict[str, float]:
    """Pooled rates across all batches of a series.

    Returns:
        Dictionary with keys:
        - total_trials: trials across every batch
        - stay_win_rate, switch_win_rate: pooled win rates in percent
        - max_stay_error, final_stay_error: errors of the worst and last batch
    """
    if len(series) == 0:
        return {}

    sizes = np.array([s.batch_size for s in series])
    stay = np.array([s.stay_wins for s in series])
    switch = np.array([s.switch_wins for s in series])
    stay_errors = np.array([convergence_error(s)["stay_error"] for s in series])

    total = int(sizes.sum())
    return {
        "total_trials": total,
        "stay_win_rate": float(stay.sum() / total * 100),
        "switch_win_rate": float(switch.sum() / total * 100),
        "max_stay_error": float(stay_errors.max()),
        "final_stay_error": float(stay_errors[-1]),
    }
