#!/usr/bin/env python3
"""Quickstart example for Monty Hall Lab.

Runs a short convergence series and doubles as a smoke test in CI.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from monty_hall_lab import MonteCarloSimulator, SimulationConfig, series_to_frame, summarize_series


def main() -> None:
    """Run a basic convergence example."""
    print("Monty Hall Lab Quickstart Example")
    print("=" * 40)

    config = SimulationConfig(
        batch_sizes=[5, 10, 100, 1000, 10000],  # Small schedule for quick execution
        base_seed=42,
        show_progress=False,  # Disabled for CI
    )

    print(f"Running batches {config.batch_sizes} with seed {config.base_seed}")
    print()

    series = MonteCarloSimulator(config).run_series()

    print(series_to_frame(series).to_string(index=False, float_format=lambda v: f"{v:.2f}"))
    print()

    for summary in series:
        assert summary.stay_wins + summary.switch_wins == summary.batch_size, (
            f"Tallies do not add up for batch of {summary.batch_size}"
        )

    pooled = summarize_series(series)
    print("✓ Quickstart example completed successfully!")
    print(f"✓ Simulated {pooled['total_trials']:,} games")
    print(f"✓ Pooled rates: stay {pooled['stay_win_rate']:.2f}%, switch {pooled['switch_win_rate']:.2f}%")


if __name__ == "__main__":
    main()
