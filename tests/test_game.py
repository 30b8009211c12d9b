"""Tests for the interactive game state machine."""

import numpy as np
import pytest

from monty_hall_lab.errors import InvalidArgumentError
from monty_hall_lab.game import GameState, MontyHallGame
from monty_hall_lab.trial import DoorContent


@pytest.fixture
def game():
    return MontyHallGame(np.random.default_rng(42))


class TestMontyHallGame:
    """Test game progression."""

    def test_starts_initial(self, game):
        assert game.state is GameState.INITIAL
        assert game.won is None
        assert game.open_doors() == set()
        assert game.prize_door in (0, 1, 2)

    def test_pick_reveals_a_decoy(self, game):
        revealed = game.pick(0)

        assert game.state is GameState.DOOR_PICKED
        assert revealed != 0
        assert revealed != game.prize_door
        assert game.open_doors() == {revealed}
        assert game.door_content(revealed) is DoorContent.DECOY
        assert game.door_content(0) is None

    @pytest.mark.parametrize("switch", [False, True])
    def test_decide(self, game, switch):
        game.pick(1)
        won = game.decide(switch)
        outcome = game.outcome()

        assert game.state is GameState.FINAL
        assert won == outcome.won(switch)
        assert game.final_choice == outcome.final_choice(switch)
        assert game.open_doors() == {0, 1, 2}

    def test_out_of_order_actions(self, game):
        with pytest.raises(InvalidArgumentError, match="not allowed"):
            game.decide(True)
        game.pick(2)
        with pytest.raises(InvalidArgumentError, match="not allowed"):
            game.pick(1)

    def test_outcome_requires_final(self, game):
        with pytest.raises(InvalidArgumentError):
            game.outcome()

    @pytest.mark.parametrize("door", [-1, 3])
    def test_invalid_door(self, game, door):
        with pytest.raises(InvalidArgumentError):
            game.pick(door)

    def test_reset(self, game):
        game.pick(0)
        game.decide(True)
        game.reset()

        assert game.state is GameState.INITIAL
        assert game.initial_pick is None
        assert game.revealed_door is None
        assert game.final_choice is None

    def test_switching_wins_exactly_when_staying_loses(self):
        rng = np.random.default_rng(0)
        for _ in range(200):
            game = MontyHallGame(rng)
            game.pick(int(rng.integers(3)))
            picked_prize = game.prize_door == game.initial_pick
            assert game.decide(True) is not picked_prize

    def test_current_choice_follows_switch(self, game):
        assert game.current_choice is None

        game.pick(0)
        assert game.current_choice == 0

        game.decide(True)
        assert game.current_choice == game.final_choice
        assert game.current_choice != 0

    def test_current_choice_after_stay(self, game):
        game.pick(2)
        game.decide(False)
        assert game.current_choice == 2
