"""Single game of the three-door puzzle.

One call draws the prize door, the player's pick and the host's reveal, and
resolves both strategies from that same draw, so a trial yields a stay
outcome and a switch outcome at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import InvalidArgumentError

DOORS = (0, 1, 2)


class DoorContent(str, Enum):
    """What sits behind a door."""

    PRIZE = "prize"
    DECOY = "decoy"


@dataclass(frozen=True)
class TrialOutcome:
    """Record of one simulated game.

    Attributes:
        prize_door: Door hiding the prize
        initial_pick: Player's first choice
        revealed_door: Door opened by the host (always a decoy, never the pick)
        switch_target: The one door that is neither the pick nor the revealed door
    """

    prize_door: int
    initial_pick: int
    revealed_door: int
    switch_target: int

    @property
    def stay_won(self) -> bool:
        return self.initial_pick == self.prize_door

    @property
    def switch_won(self) -> bool:
        return self.switch_target == self.prize_door

    def final_choice(self, switch: bool) -> int:
        return self.switch_target if switch else self.initial_pick

    def won(self, switch: bool) -> bool:
        return self.final_choice(switch) == self.prize_door

    def door_contents(self) -> tuple[DoorContent, ...]:
        return tuple(
            DoorContent.PRIZE if door == self.prize_door else DoorContent.DECOY
            for door in DOORS
        )


def _check_door(door: int, name: str) -> None:
    if door not in DOORS:
        raise InvalidArgumentError(f"{name} must be one of {DOORS}, got {door!r}")


def legal_reveals(pick: int, prize: int) -> tuple[int, ...]:
    """Doors the host may open: neither the player's pick nor the prize door."""
    _check_door(pick, "pick")
    _check_door(prize, "prize")
    return tuple(door for door in DOORS if door != pick and door != prize)


def choose_reveal(pick: int, prize: int, rng: np.random.Generator) -> int:
    """Pick the host's door uniformly from the legal set.

    With one legal door the choice is forced and no randomness is consumed.
    """
    candidates = legal_reveals(pick, prize)
    if len(candidates) == 1:
        return candidates[0]
    return candidates[int(rng.integers(len(candidates)))]


def switch_target(pick: int, revealed: int) -> int:
    """Return the door a switching player ends up on."""
    _check_door(pick, "pick")
    _check_door(revealed, "revealed")
    if pick == revealed:
        raise InvalidArgumentError("the revealed door cannot be the player's pick")
    return next(door for door in DOORS if door != pick and door != revealed)


def play_trial(rng: np.random.Generator | None = None) -> TrialOutcome:
    """Play one complete game and return the full record."""
    if rng is None:
        rng = np.random.default_rng()

    prize = int(rng.integers(len(DOORS)))
    pick = int(rng.integers(len(DOORS)))
    revealed = choose_reveal(pick, prize, rng)

    return TrialOutcome(
        prize_door=prize,
        initial_pick=pick,
        revealed_door=revealed,
        switch_target=switch_target(pick, revealed),
    )


def run_trial(rng: np.random.Generator | None = None) -> tuple[bool, bool]:
    """Play one game and return ``(stay_won, switch_won)``."""
    outcome = play_trial(rng)
    return outcome.stay_won, outcome.switch_won
