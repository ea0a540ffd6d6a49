"""
Tavern Farkle - Automated Player

Plays a whole turn for a computer-controlled seat: roll, keep every scoring
die, ask the policy whether to go on, repeat. The loop is synchronous;
pacing for a human audience belongs to the presentation layer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.engine.base import GamePhase, TurnAction
from src.engine.policy import ThresholdPolicy
from src.engine.scoring import FarkleScoring

if TYPE_CHECKING:
    from src.engine.game import FarkleGame

logger = logging.getLogger(__name__)


class AutomatedPlayer:
    """
    Drives a FarkleGame for the current (automated) player.

    Args:
        policy: Continue/bank decision rule
        max_rolls: Rolls allowed in one turn before forcing an end to it
    """

    def __init__(self, policy: ThresholdPolicy, max_rolls: int = 20) -> None:
        self.policy = policy
        self.max_rolls = max_rolls

    def play_turn(self, game: FarkleGame) -> None:
        """
        Play the current player's turn to its end.

        The turn ends in a bust, a bank, or, when something unexpected
        happens or the roll cap is hit, a forced bank or pass.
        """
        turn_number = game.turn_number
        name = game.current_player.name

        for _ in range(self.max_rolls):
            if not game.roll():
                logger.warning("%s's roll was rejected in %s", name, game.phase.value)
                break
            if game.turn_number != turn_number or game.is_over:
                return
            if game.phase is not GamePhase.SELECTING:
                logger.warning("%s's roll left the game in %s", name, game.phase.value)
                break

            self.select_scoring_dice(game)
            if game.pending_points == 0:
                logger.warning("%s found no valid selection", name)
                break

            if self.policy.choose_action(game.snapshot()) is TurnAction.BANK:
                if game.bank():
                    return
                logger.warning("%s's bank was rejected", name)
                break
        else:
            logger.warning("%s reached the %d roll cap", name, self.max_rolls)

        self._force_end(game, turn_number)

    def select_scoring_dice(self, game: FarkleGame) -> int:
        """
        Select every scoring die among the available ones.

        Returns:
            The resulting pending score
        """
        slots = game.pool.available_indices()
        faces = game.pool.available_values()
        for position in sorted(FarkleScoring.scoring_indices(faces)):
            game.toggle_die_selection(slots[position])
        return game.pending_points

    def _force_end(self, game: FarkleGame, turn_number: int) -> None:
        """Bank a valid selection if there is one, otherwise pass."""
        if game.turn_number != turn_number or game.is_over:
            return
        if game.phase is GamePhase.SELECTING and game.pending_points > 0 and game.bank():
            return
        game.pass_turn()
