"""Configuration handling for Monty Hall Lab."""

import numbers
import os
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import InvalidArgumentError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False


N_JOBS_ENV_VAR = "MONTY_HALL_LAB_N_JOBS"

DEFAULT_BATCH_SIZES = [5, 10, 100, 1000, 3000, 5000, 10000, 50000, 1000000]


def check_batch_size(batch_size) -> int:
    """Return ``batch_size`` as an int, or raise if it is not a positive integer."""
    # bool is an Integral but never a meaningful batch size
    if isinstance(batch_size, bool) or not isinstance(batch_size, numbers.Integral):
        raise InvalidArgumentError(
            f"Batch size must be a positive integer, got {batch_size!r}"
        )
    if batch_size < 1:
        raise InvalidArgumentError(f"Batch size must be >= 1, got {batch_size}")
    return int(batch_size)


def validate_batch_sizes(batch_sizes) -> List[int]:
    """Check a batch-size schedule and return it as a list.

    Raises:
        InvalidArgumentError: If any entry is not a positive integer
    """
    if isinstance(batch_sizes, (str, bytes)):
        raise InvalidArgumentError("Batch sizes must be a sequence of integers")
    return [check_batch_size(size) for size in batch_sizes]


@dataclass
class SimulationConfig:
    """Configuration for convergence runs.

    Attributes:
        batch_sizes: Ordered schedule of batch sizes to simulate
        base_seed: Seed for the random generator (None for fresh entropy)
        n_jobs: Number of worker processes per batch. Set to -1 to use all CPUs.
            None falls back to the MONTY_HALL_LAB_N_JOBS env var, then 1.
        show_progress: Whether to show progress bars (auto-disabled when n_jobs > 1)
        delay_seconds: Pause between batches, used by the CLI and UI only
    """
    batch_sizes: List[int] = field(default_factory=lambda: list(DEFAULT_BATCH_SIZES))
    base_seed: Optional[int] = None
    n_jobs: Optional[int] = None
    show_progress: bool = True
    delay_seconds: float = 0.0

    def __post_init__(self):
        self.batch_sizes = validate_batch_sizes(self.batch_sizes)

        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")

        # Environment only applies when n_jobs was not given
        if self.n_jobs is None:
            try:
                self.n_jobs = int(os.environ.get(N_JOBS_ENV_VAR, 1))
            except ValueError:
                self.n_jobs = 1

        if self.n_jobs == -1:
            self.n_jobs = os.cpu_count() or 1

        max_cpus = os.cpu_count() or 1
        if self.n_jobs > max_cpus:
            self.n_jobs = max_cpus

        self.n_jobs = max(1, self.n_jobs)

        # Parallel workers would interleave progress output
        if self.n_jobs != 1:
            self.show_progress = False

    @staticmethod
    def read_file(config_path: Union[str, Path]) -> Dict[str, Any]:
        """Read the raw settings of a TOML or YAML file, sections flattened.

        Args:
            config_path: Path to configuration file

        Returns:
            Settings exactly as written, before defaults or env overrides

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If unsupported file format or invalid configuration
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == ".toml":
            with open(config_path, "rb") as f:
                config_data = tomllib.load(f)
        elif config_path.suffix.lower() in [".yaml", ".yml"]:
            if not YAML_AVAILABLE:
                raise ValueError(
                    "YAML support not available. Install with: pip install monty-hall-lab[cli]"
                )
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        else:
            raise ValueError(
                f"Unsupported configuration file format: {config_path.suffix}. "
                "Supported formats: .toml, .yaml, .yml"
            )

        # [presentation] groups the pacing options
        presentation = config_data.pop("presentation", {})
        config_data.update(presentation)

        return config_data

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "SimulationConfig":
        """Load configuration from a TOML or YAML file."""
        return cls.from_dict(cls.read_file(config_path))

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "SimulationConfig":
        """Create configuration from dictionary, rejecting unknown keys."""
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
