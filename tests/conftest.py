"""Shared fixtures."""

import pytest


class ScriptedRng:
    """Stand-in for numpy's Generator that returns a fixed list of draws."""

    def __init__(self, draws):
        self.draws = list(draws)

    def integers(self, high):
        value = self.draws.pop(0)
        assert 0 <= value < high, f"scripted draw {value} out of range for high={high}"
        return value


@pytest.fixture
def scripted_rng():
    return ScriptedRng


# prize, pick, [reveal index only when pick == prize]
SCRIPTED_DRAWS = [
    0, 0, 1,  # prize 0, pick 0, host opens door 2 of (1, 2)
    1, 2,     # prize 1, pick 2, host forced to door 0
    2, 2, 0,  # prize 2, pick 2, host opens door 0 of (0, 1)
    0, 1,     # prize 0, pick 1, host forced to door 2
]


@pytest.fixture
def scripted_draws():
    return list(SCRIPTED_DRAWS)
