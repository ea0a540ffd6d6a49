"""
Tavern Farkle - Decision Policy

Heuristic continue/bank rule shared by the automated opponent and the
player-facing advice. The threshold depends on how many dice the next roll
would use: the fewer dice, the likelier a Farkle, so the less it takes to
make banking worthwhile.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.engine.base import Difficulty, GamePhase, TurnAction

if TYPE_CHECKING:
    from src.engine.game import GameSnapshot


class ThresholdPolicy:
    """
    Bank once the turn score reaches a risk threshold.

    Args:
        difficulty: Scales every threshold (easy banks sooner, hard later)
    """

    # Threshold by number of dice about to be rolled
    THRESHOLDS = {
        1: 150,
        2: 250,
        3: 350,
        4: 500,
        5: 600,
        6: 800,
    }
    DEFAULT_THRESHOLD = 300

    def __init__(self, difficulty: Difficulty = Difficulty.MEDIUM) -> None:
        self.difficulty = difficulty

    def threshold(self, dice_count: int) -> float:
        """Turn score at which to stop rolling with dice_count dice left."""
        base = self.THRESHOLDS.get(dice_count, self.DEFAULT_THRESHOLD)
        return base * self.difficulty.value

    def choose_action(self, snapshot: GameSnapshot) -> TurnAction:
        """
        Decide whether to roll again or bank.

        Hot dice (no dice left to roll) always continues: all six come back.
        """
        if snapshot.available_dice_count == 0:
            return TurnAction.CONTINUE

        live_score = snapshot.turn_total + snapshot.pending_points
        if snapshot.needs_opening_score and live_score < snapshot.opening_score:
            return TurnAction.CONTINUE

        if live_score < self.threshold(snapshot.available_dice_count):
            return TurnAction.CONTINUE
        return TurnAction.BANK

    def advice(self, snapshot: GameSnapshot) -> str:
        """Narrate the current verdict for the player at the table."""
        if snapshot.phase is GamePhase.ROLLING:
            return "Wait for the dice to settle, friend."
        if snapshot.phase is GamePhase.AWAITING_ROLL:
            return "Cast the bones and let fate decide!"
        if snapshot.phase is not GamePhase.SELECTING:
            return "The Oracle sleeps. Play thy turn."

        if snapshot.pending_points == 0:
            return "Thou must select scoring dice before the Oracle can see."

        live_score = snapshot.turn_total + snapshot.pending_points
        remaining = snapshot.available_dice_count

        if remaining == 0:
            return "Hot Dice! The fire is with thee. Roll all six again!"

        if snapshot.needs_opening_score and live_score < snapshot.opening_score:
            return (
                f"Thy {live_score} Gold will not open thy purse. "
                f"Reach {snapshot.opening_score} before thou may bank."
            )

        if self.choose_action(snapshot) is TurnAction.BANK:
            return (
                f"Bank thy {live_score} Gold. "
                "A wise merchant knows when to fold and keep the coin."
            )
        die_word = "die" if remaining == 1 else "dice"
        return (
            f"Thy {live_score} Gold is a modest purse. "
            f"Risk the remaining {remaining} {die_word} for more!"
        )
