"""Tests for package imports and integration."""

import pytest


def test_package_imports():
    """Test that main package components can be imported."""
    from monty_hall_lab import (
        InvalidArgumentError,
        MonteCarloSimulator,
        SimulationConfig,
        run_batch,
        run_series,
        run_trial,
    )

    config = SimulationConfig(show_progress=False)
    _ = MonteCarloSimulator(config)

    stay_won, switch_won = run_trial()
    assert stay_won != switch_won
    assert run_batch(10).batch_size == 10
    assert len(run_series([1, 2])) == 2
    assert issubclass(InvalidArgumentError, ValueError)


def test_integration_workflow():
    """Test complete workflow from config to series to table."""
    from monty_hall_lab import MonteCarloSimulator, SimulationConfig, series_to_frame, summarize_series

    config = SimulationConfig(batch_sizes=[10, 100, 1000], base_seed=42, show_progress=False)
    series = MonteCarloSimulator(config).run_series()

    frame = series_to_frame(series)
    assert frame["batch_size"].tolist() == [10, 100, 1000]
    assert (frame["stay_wins"] + frame["switch_wins"] == frame["batch_size"]).all()

    pooled = summarize_series(series)
    assert pooled["total_trials"] == 1110
    assert pooled["stay_win_rate"] + pooled["switch_win_rate"] == pytest.approx(100.0)
