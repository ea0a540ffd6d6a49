"""
Tavern Farkle - Decision Policy Tests
"""

import pytest
from src.engine.base import Difficulty, GamePhase, TurnAction
from src.engine.game import GameSnapshot, Player
from src.engine.policy import ThresholdPolicy


def make_snapshot(
    turn_total: int = 0,
    pending_points: int = 0,
    available_dice_count: int = 6,
    phase: GamePhase = GamePhase.SELECTING,
    needs_opening_score: bool = False,
    opening_score: int = 500,
) -> GameSnapshot:
    return GameSnapshot(
        phase=phase,
        players=(Player("Ann"), Player("Bob")),
        current_player_index=0,
        turn_total=turn_total,
        pending_points=pending_points,
        available_dice_count=available_dice_count,
        dice=(),
        target_score=10000,
        opening_score=opening_score,
        needs_opening_score=needs_opening_score,
    )


class TestThreshold:
    """Tests for ThresholdPolicy.threshold()."""

    @pytest.mark.parametrize("dice,expected", [
        (1, 150),
        (2, 250),
        (3, 350),
        (4, 500),
        (5, 600),
        (6, 800),
    ])
    def test_medium_table(self, dice: int, expected: int):
        assert ThresholdPolicy().threshold(dice) == expected

    def test_unlisted_count_uses_default(self):
        assert ThresholdPolicy().threshold(7) == 300

    @pytest.mark.parametrize("difficulty,expected", [
        (Difficulty.EASY, 560),
        (Difficulty.MEDIUM, 800),
        (Difficulty.HARD, 960),
    ])
    def test_difficulty_scales_threshold(self, difficulty: Difficulty, expected: int):
        assert ThresholdPolicy(difficulty).threshold(6) == pytest.approx(expected)


class TestChooseAction:
    """Tests for ThresholdPolicy.choose_action()."""

    def test_continue_below_threshold(self):
        snapshot = make_snapshot(turn_total=200, pending_points=100, available_dice_count=4)
        assert ThresholdPolicy().choose_action(snapshot) is TurnAction.CONTINUE

    def test_bank_at_threshold(self):
        snapshot = make_snapshot(turn_total=400, pending_points=100, available_dice_count=4)
        assert ThresholdPolicy().choose_action(snapshot) is TurnAction.BANK

    def test_fewer_dice_bank_sooner(self):
        snapshot = make_snapshot(pending_points=200, available_dice_count=1)
        assert ThresholdPolicy().choose_action(snapshot) is TurnAction.BANK

    def test_hot_dice_always_continue(self):
        snapshot = make_snapshot(turn_total=5000, pending_points=1500, available_dice_count=0)
        assert ThresholdPolicy().choose_action(snapshot) is TurnAction.CONTINUE

    def test_hard_keeps_rolling_where_easy_banks(self):
        snapshot = make_snapshot(pending_points=500, available_dice_count=5)
        assert ThresholdPolicy(Difficulty.EASY).choose_action(snapshot) is TurnAction.BANK
        assert ThresholdPolicy(Difficulty.HARD).choose_action(snapshot) is TurnAction.CONTINUE

    def test_opening_score_keeps_rolling(self):
        snapshot = make_snapshot(
            pending_points=300,
            available_dice_count=1,
            needs_opening_score=True,
        )
        assert ThresholdPolicy().choose_action(snapshot) is TurnAction.CONTINUE

    def test_opening_score_reached_uses_threshold(self):
        snapshot = make_snapshot(
            pending_points=500,
            available_dice_count=1,
            needs_opening_score=True,
        )
        assert ThresholdPolicy().choose_action(snapshot) is TurnAction.BANK


class TestAdvice:
    """Tests for ThresholdPolicy.advice()."""

    @pytest.fixture
    def policy(self) -> ThresholdPolicy:
        return ThresholdPolicy()

    def test_awaiting_roll(self, policy):
        snapshot = make_snapshot(phase=GamePhase.AWAITING_ROLL)
        assert policy.advice(snapshot) == "Cast the bones and let fate decide!"

    def test_rolling(self, policy):
        snapshot = make_snapshot(phase=GamePhase.ROLLING)
        assert policy.advice(snapshot) == "Wait for the dice to settle, friend."

    @pytest.mark.parametrize("phase", [GamePhase.TURN_OVER, GamePhase.GAME_OVER])
    def test_outside_turn(self, policy, phase: GamePhase):
        assert policy.advice(make_snapshot(phase=phase)) == "The Oracle sleeps. Play thy turn."

    def test_no_selection(self, policy):
        snapshot = make_snapshot(turn_total=300)
        assert "must select scoring dice" in policy.advice(snapshot)

    def test_hot_dice(self, policy):
        snapshot = make_snapshot(pending_points=1500, available_dice_count=0)
        assert policy.advice(snapshot).startswith("Hot Dice!")

    def test_bank_advice(self, policy):
        snapshot = make_snapshot(turn_total=300, pending_points=100, available_dice_count=2)
        assert policy.advice(snapshot) == (
            "Bank thy 400 Gold. A wise merchant knows when to fold and keep the coin."
        )

    def test_continue_advice(self, policy):
        snapshot = make_snapshot(pending_points=100, available_dice_count=5)
        assert policy.advice(snapshot) == (
            "Thy 100 Gold is a modest purse. Risk the remaining 5 dice for more!"
        )

    def test_continue_advice_single_die(self, policy):
        snapshot = make_snapshot(pending_points=50, available_dice_count=1)
        assert policy.advice(snapshot).endswith("Risk the remaining 1 die for more!")

    def test_opening_score_advice(self, policy):
        snapshot = make_snapshot(
            pending_points=300,
            available_dice_count=3,
            needs_opening_score=True,
        )
        assert policy.advice(snapshot) == (
            "Thy 300 Gold will not open thy purse. Reach 500 before thou may bank."
        )

    def test_advice_agrees_with_choice(self, policy):
        for dice in range(1, 7):
            for points in range(50, 1200, 50):
                snapshot = make_snapshot(pending_points=points, available_dice_count=dice)
                banks = policy.choose_action(snapshot) is TurnAction.BANK
                assert policy.advice(snapshot).startswith("Bank") == banks
