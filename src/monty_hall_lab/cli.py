"""Command Line Interface for Monty Hall Lab."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from . import __version__
from .config import SimulationConfig
from .game import MontyHallGame
from .metrics import THEORETICAL_STAY_RATE, THEORETICAL_SWITCH_RATE, series_to_frame
from .simulator import MonteCarloSimulator


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="monty-hall-lab",
        description="Monty Hall Monte Carlo convergence lab",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default convergence schedule
  monty-hall-lab --seed 42

  # Run a custom schedule with four workers per batch
  monty-hall-lab --batch-sizes 10 100 100000 --n-jobs 4

  # The 1,000,000-game batch takes several seconds on one process;
  # --n-jobs splits every batch across worker processes
  monty-hall-lab --seed 42 --n-jobs -1

  # Play one game, then run the schedule from a config file
  monty-hall-lab --play --config lab.toml

  # Generate sample config
  monty-hall-lab --generate-config sample_config.toml
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file (TOML or YAML)"
    )
    parser.add_argument(
        "--batch-sizes",
        type=int,
        nargs="+",
        help="Batch sizes to simulate, in order (space-separated)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        help="Number of worker processes per batch"
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to pause between batches"
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play one interactive game before simulating"
    )
    parser.add_argument(
        "--generate-config",
        type=Path,
        help="Generate sample configuration file and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def generate_sample_config(config_path: Path) -> None:
    """Generate a sample configuration file.

    Args:
        config_path: Path to save the configuration file
    """
    config_content = """# Monty Hall Lab Configuration File

# Batch sizes to simulate, in order
batch_sizes = [5, 10, 100, 1000, 3000, 5000, 10000, 50000, 1000000]

base_seed = 42          # Random seed for reproducibility
# n_jobs = 4            # Worker processes per batch (default: MONTY_HALL_LAB_N_JOBS env var, else 1)

[presentation]
show_progress = false
delay_seconds = 0.8     # Pause between batches
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(config_content)

    print(f"Sample configuration generated: {config_path}")
    print("Edit the file to customize your simulation parameters.")


def play_interactive(game: MontyHallGame, ask: Callable[[str], str] = input) -> bool:
    """Play one game in the terminal. Doors are numbered 1-3 for the player.

    Returns:
        Whether the player won
    """
    while True:
        answer = ask("Pick a door (1, 2 or 3): ").strip()
        if answer in ("1", "2", "3"):
            break
        print("Please answer 1, 2 or 3.")

    revealed = game.pick(int(answer) - 1)
    print(f"The host opens door {revealed + 1}: a goat.")

    while True:
        answer = ask("Stick or switch? [stick/switch]: ").strip().lower()
        if answer in ("stick", "stay", "switch"):
            break
        print("Please answer 'stick' or 'switch'.")

    won = game.decide(answer == "switch")
    print(f"You {'won' if won else 'lost'}! The car was behind door {game.prize_door + 1}.")
    return won


def build_config(args: argparse.Namespace, logger: logging.Logger) -> SimulationConfig:
    """Load the config file, if any, and apply command line overrides."""
    if args.config:
        logger.info(f"Loading configuration from {args.config}")
        config_dict = SimulationConfig.read_file(args.config)
    else:
        config_dict = {}

    if args.batch_sizes is not None:
        config_dict["batch_sizes"] = args.batch_sizes
    if args.seed is not None:
        config_dict["base_seed"] = args.seed
    if args.n_jobs is not None:
        config_dict["n_jobs"] = args.n_jobs
    if args.delay is not None:
        config_dict["delay_seconds"] = args.delay

    return SimulationConfig.from_dict(config_dict)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        if args.generate_config:
            generate_sample_config(args.generate_config)
            return 0

        if args.config and not args.config.exists():
            parser.error(f"Config file does not exist: {args.config}")

        config = build_config(args, logger)
        logger.info(f"Simulation configuration: {config}")

        simulator = MonteCarloSimulator(config)

        if args.play:
            play_interactive(MontyHallGame(simulator.rng))
            print()

        summaries = []
        for i, summary in enumerate(simulator.iter_series()):
            if i > 0 and config.delay_seconds:
                time.sleep(config.delay_seconds)
            summaries.append(summary)
            print(
                f"After {summary.batch_size:>9,} games: "
                f"stay {summary.stay_win_rate:5.1f}% | switch {summary.switch_win_rate:5.1f}%"
            )

        frame = series_to_frame(summaries)
        print("\nSimulation Results:")
        print(frame.to_string(index=False, float_format=lambda v: f"{v:.2f}"))
        print(
            f"\nTheoretical probabilities: Stay ({THEORETICAL_STAY_RATE:.2f}%), "
            f"Switch ({THEORETICAL_SWITCH_RATE:.2f}%)"
        )

        logger.info("Simulation completed successfully")
        return 0

    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Simulation failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
