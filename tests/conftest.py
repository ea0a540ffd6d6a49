"""
Tavern Farkle - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from collections import deque
from typing import Callable, Sequence

import pytest

from src.engine.base import GameConfig, GameMode
from src.engine.game import FarkleGame, Player


# =============================================================================
# SCRIPTED DICE
# =============================================================================

class ScriptedRoller:
    """Dice source that replays fixed rolls, truncated to the dice requested."""

    def __init__(self, rolls: Sequence[Sequence[int]]) -> None:
        self._rolls = deque(tuple(r) for r in rolls)
        self.requests: list[int] = []

    def __call__(self, count: int) -> tuple[int, ...]:
        self.requests.append(count)
        if not self._rolls:
            raise AssertionError(f"Dice script exhausted (asked for {count} dice).")
        return self._rolls.popleft()[:count]

    @property
    def remaining(self) -> int:
        return len(self._rolls)


@pytest.fixture
def scripted_roller() -> Callable[[Sequence[Sequence[int]]], ScriptedRoller]:
    """Factory for ScriptedRoller instances."""
    return ScriptedRoller


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def scoring_rolls() -> dict[str, tuple[tuple[int, ...], int, int]]:
    """
    Roll patterns with expected scores.

    Returns:
        Dict mapping name to (dice_values, expected_points, expected_used)
    """
    return {
        # Singles
        "empty": ((), 0, 0),
        "single_one": ((1,), 100, 1),
        "single_five": ((5,), 50, 1),
        "single_two": ((2,), 0, 0),
        "two_ones": ((1, 1), 200, 2),
        "one_and_five": ((1, 5), 150, 2),

        # Multiples
        "three_ones": ((1, 1, 1), 1000, 3),
        "three_twos": ((2, 2, 2), 200, 3),
        "four_twos": ((2, 2, 2, 2), 400, 4),
        "five_fours": ((4, 4, 4, 4, 4), 1200, 5),
        "six_ones": ((1, 1, 1, 1, 1, 1), 4000, 6),
        "six_twos": ((2, 2, 2, 2, 2, 2), 800, 6),

        # Six-dice specials
        "straight": ((1, 2, 3, 4, 5, 6), 1500, 6),
        "straight_shuffled": ((6, 4, 2, 5, 3, 1), 1500, 6),
        "three_pairs": ((2, 2, 3, 3, 4, 4), 1500, 6),
        "two_triplets": ((2, 2, 2, 5, 5, 5), 2500, 6),
        "two_triplets_with_ones": ((1, 1, 1, 6, 6, 6), 2500, 6),

        # Mixed
        "pair_of_ones_and_triple_twos": ((1, 1, 2, 2, 2), 400, 5),
        "three_ones_plus_five": ((1, 1, 1, 5), 1050, 4),
        "four_of_a_kind_and_pair": ((3, 3, 3, 3, 2, 2), 600, 4),
        "five_dice_run": ((1, 2, 3, 4, 5), 150, 2),
        "partial": ((1, 2, 3, 4, 6, 6), 100, 1),
        "bust": ((2, 3, 4, 6, 6, 2), 0, 0),
    }


# =============================================================================
# GAME FIXTURES
# =============================================================================

@pytest.fixture
def head_to_head() -> FarkleGame:
    """Two human players, default rules, turn started."""
    game = FarkleGame(GameConfig(mode=GameMode.HEAD_TO_HEAD))
    game.start_turn()
    return game


@pytest.fixture
def event_log() -> Callable[[FarkleGame], list]:
    """Subscribe a recording listener to a game and return its list of payloads."""
    def attach(game: FarkleGame) -> list:
        payloads: list = []
        game.subscribe(payloads.append)
        return payloads
    return attach


@pytest.fixture
def make_players() -> Callable[..., list[Player]]:
    """Build players from (name, is_automated) pairs."""
    def build(*seats: tuple[str, bool]) -> list[Player]:
        return [Player(name, is_automated=automated) for name, automated in seats]
    return build
