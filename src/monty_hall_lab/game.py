"""Interactive single game, driven one step at a time by a presentation layer."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import numpy as np

from .errors import InvalidArgumentError
from .trial import DOORS, DoorContent, TrialOutcome, choose_reveal, switch_target

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    INITIAL = "initial"
    DOOR_PICKED = "door_picked"
    FINAL = "final"


class MontyHallGame:
    """One playable game: pick a door, see the host's reveal, stay or switch.

    The reveal and switch rules come from :mod:`monty_hall_lab.trial`, so an
    interactive game follows exactly the logic used by the batch simulator.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self._rng = rng if rng is not None else np.random.default_rng()
        self.reset()

    def reset(self) -> None:
        """Place a new prize and return to the initial state."""
        self.prize_door = int(self._rng.integers(len(DOORS)))
        self.initial_pick: Optional[int] = None
        self.revealed_door: Optional[int] = None
        self.final_choice: Optional[int] = None
        self.switched: Optional[bool] = None
        self.state = GameState.INITIAL

    def _require(self, state: GameState) -> None:
        if self.state is not state:
            raise InvalidArgumentError(
                f"Action not allowed in state {self.state.value!r}, expected {state.value!r}"
            )

    def pick(self, door: int) -> int:
        """Choose a door; the host opens a decoy door, which is returned."""
        self._require(GameState.INITIAL)
        if door not in DOORS:
            raise InvalidArgumentError(f"door must be one of {DOORS}, got {door!r}")

        self.initial_pick = door
        self.revealed_door = choose_reveal(door, self.prize_door, self._rng)
        self.state = GameState.DOOR_PICKED
        logger.debug("Player picked %d, host revealed %d", door, self.revealed_door)
        return self.revealed_door

    def decide(self, switch: bool) -> bool:
        """Stay or switch; returns whether the player won."""
        self._require(GameState.DOOR_PICKED)
        self.switched = switch
        self.final_choice = (
            switch_target(self.initial_pick, self.revealed_door) if switch else self.initial_pick
        )
        self.state = GameState.FINAL
        return self.won

    @property
    def won(self) -> Optional[bool]:
        if self.state is not GameState.FINAL:
            return None
        return self.final_choice == self.prize_door

    @property
    def current_choice(self) -> Optional[int]:
        """The door the player holds now: the final choice once made, else the pick."""
        if self.final_choice is not None:
            return self.final_choice
        return self.initial_pick

    def open_doors(self) -> set[int]:
        if self.state is GameState.INITIAL:
            return set()
        if self.state is GameState.DOOR_PICKED:
            return {self.revealed_door}
        return set(DOORS)

    def door_content(self, door: int) -> Optional[DoorContent]:
        """Content of an opened door, or None while it is still closed."""
        if door not in self.open_doors():
            return None
        return DoorContent.PRIZE if door == self.prize_door else DoorContent.DECOY

    def outcome(self) -> TrialOutcome:
        """The finished game as a TrialOutcome."""
        self._require(GameState.FINAL)
        return TrialOutcome(
            prize_door=self.prize_door,
            initial_pick=self.initial_pick,
            revealed_door=self.revealed_door,
            switch_target=switch_target(self.initial_pick, self.revealed_door),
        )
