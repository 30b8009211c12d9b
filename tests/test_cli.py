"""Tests for the command line interface."""

import logging

import numpy as np
import pytest

from monty_hall_lab.cli import (
    build_config,
    create_parser,
    generate_sample_config,
    main,
    play_interactive,
)
from monty_hall_lab.config import SimulationConfig
from monty_hall_lab.game import GameState, MontyHallGame


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("MONTY_HALL_LAB_N_JOBS", raising=False)


def test_parser_defaults():
    args = create_parser().parse_args([])
    assert args.batch_sizes is None
    assert args.seed is None
    assert args.play is False


def test_run_custom_schedule(capsys):
    exit_code = main(["--batch-sizes", "10", "100", "--seed", "1"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert " 10 games:" in out
    assert " 100 games:" in out
    assert "Theoretical probabilities" in out


def test_invalid_batch_size_fails(capsys):
    assert main(["--batch-sizes", "10", "0"]) == 1


def test_missing_config_file(tmp_path):
    with pytest.raises(SystemExit):
        main(["--config", str(tmp_path / "missing.toml")])


def test_generate_config_loads(tmp_path):
    path = tmp_path / "sample.toml"
    assert main(["--generate-config", str(path)]) == 0

    config = SimulationConfig.from_file(path)
    assert config.base_seed == 42
    assert config.delay_seconds == 0.8


def test_config_file_with_overrides(tmp_path, capsys):
    path = tmp_path / "lab.toml"
    generate_sample_config(path)

    exit_code = main(["--config", str(path), "--batch-sizes", "5", "--delay", "0"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert " 5 games:" in out
    assert "1,000,000" not in out


def test_play_interactive_retries_bad_input(capsys):
    answers = iter(["7", "2", "maybe", "switch"])
    game = MontyHallGame(np.random.default_rng(0))

    won = play_interactive(game, ask=lambda prompt: next(answers))
    out = capsys.readouterr().out

    assert game.state is GameState.FINAL
    assert game.initial_pick == 1
    assert game.switched is True
    assert won == game.won
    assert "Please answer 1, 2 or 3." in out
    assert "Please answer 'stick' or 'switch'." in out


def test_parser_epilog_mentions_parallel_batches():
    assert "--n-jobs -1" in create_parser().epilog


def test_cli_n_jobs_one_beats_env(monkeypatch):
    monkeypatch.setenv("MONTY_HALL_LAB_N_JOBS", "2")
    args = create_parser().parse_args(["--n-jobs", "1"])

    config = build_config(args, logging.getLogger(__name__))

    assert config.n_jobs == 1
    assert config.show_progress is True


def test_cli_n_jobs_one_beats_config_file(tmp_path):
    path = tmp_path / "lab.toml"
    path.write_text("n_jobs = 2\nbase_seed = 3\n")
    args = create_parser().parse_args(["--config", str(path), "--n-jobs", "1"])

    config = build_config(args, logging.getLogger(__name__))

    assert config.n_jobs == 1
    assert config.show_progress is True
    assert config.base_seed == 3
