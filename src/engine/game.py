"""
Tavern Farkle - Turn / Game State Machine

One FarkleGame owns the seated players, the dice pool, the current turn and
(optionally) a tournament bracket. The presentation layer drives it through
start_turn(), roll(), toggle_die_selection(), bank() and the tournament
entry points, and listens for EventPayloads to render.

Illegal actions never raise: they are no-ops that emit ACTION_REJECTED with
a message and return a falsy result. ValueError is reserved for programming
errors such as an out-of-range die index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Sequence

from src.engine.automaton import AutomatedPlayer
from src.engine.base import (
    DieStatus,
    GameConfig,
    GameMode,
    GamePhase,
    HistoryEntry,
    ScoreResult,
    TurnState,
)
from src.engine.dice import DicePool, Roller
from src.engine.events import EventListener, EventPayload, GameEvent
from src.engine.policy import ThresholdPolicy
from src.engine.scoring import FarkleScoring
from src.engine.tournament import Match, Tournament
from src.engine.validators import (
    validate_dice_values,
    validate_die_index,
    validate_player_names,
)

logger = logging.getLogger(__name__)

_ROLLABLE_PHASES = (GamePhase.AWAITING_ROLL, GamePhase.SELECTING)


@dataclass
class Player:
    """A seat at the table. Mutated only when a turn is banked."""
    name: str
    total_score: int = 0
    is_automated: bool = False
    has_opened_account: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only view of a game, for the decision policy and for rendering.

    Attributes:
        phase: Current phase of the state machine
        players: Copies of the seated players
        current_player_index: Whose turn it is
        turn_total: Committed points this turn
        pending_points: Points of the current selection
        available_dice_count: Dice the next roll would use (0 means hot dice)
        dice: (face value, status) per die slot
        target_score: Score that wins the game or match
        opening_score: Minimum first bank when the opening rule is on
        needs_opening_score: Opening rule is on and the current player has not banked yet
        roll_count: Rolls taken this turn
        message: Most recent event message
        winner: Winner of the game or current match, once decided
        bracket: Copies of the tournament matches, empty outside tournaments
        champion: Tournament winner, once decided
    """
    phase: GamePhase
    players: tuple[Player, ...]
    current_player_index: int
    turn_total: int
    pending_points: int
    available_dice_count: int
    dice: tuple[tuple[int, DieStatus], ...]
    target_score: int
    opening_score: int = 0
    needs_opening_score: bool = False
    roll_count: int = 0
    message: str = ""
    winner: str | None = None
    bracket: tuple[Match, ...] = field(default_factory=tuple)
    champion: str | None = None

    @property
    def current_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    @property
    def live_score(self) -> int:
        return self.turn_total + self.pending_points


class FarkleGame:
    """
    Farkle rules and turn progression for 2-N players.

    Args:
        config: Game configuration (defaults to GameConfig())
        players: Seated players; defaults depend on config.mode. Tournament
            games start empty and are seated by start_tournament().
        roller: Source of dice faces, see DicePool
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        players: Sequence[Player] | None = None,
        roller: Roller | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.pool = DicePool(roller)
        self.turn = TurnState()
        self.history: list[HistoryEntry] = []
        self.tournament: Tournament | None = None
        self.winner: str | None = None
        self.message = ""
        self.turn_number = 0

        if players is None:
            players = self._default_players(self.config.mode)
        self.players: list[Player] = list(players)
        if self.players:
            names = validate_player_names([p.name for p in self.players])
            self.players = [replace(p, name=name) for p, name in zip(self.players, names)]
        self.current_player_index = 0

        self.policy = ThresholdPolicy(self.config.difficulty)
        self.autopilot = AutomatedPlayer(self.policy, max_rolls=self.config.ai_max_rolls)

        self._listeners: list[EventListener] = []
        self._is_rolling = False
        self._automation_active = False

    @staticmethod
    def _default_players(mode: GameMode) -> list[Player]:
        if mode is GameMode.VS_COMPUTER:
            return [Player("Thou"), Player("Opponent", is_automated=True)]
        if mode is GameMode.HEAD_TO_HEAD:
            return [Player("Player 1"), Player("Player 2")]
        return []

    # -- Public state ----------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.turn.phase

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def pending_points(self) -> int:
        return self.turn.pending.points

    @property
    def live_turn_score(self) -> int:
        """Committed turn points plus the current selection."""
        return self.turn.live_score

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    def snapshot(self) -> GameSnapshot:
        """Copy the public state into a GameSnapshot."""
        player = self.current_player if self.players else None
        needs_opening = (
            self.config.opening_score_rule
            and player is not None
            and not player.has_opened_account
        )
        tournament = self.tournament
        return GameSnapshot(
            phase=self.phase,
            players=tuple(replace(p) for p in self.players),
            current_player_index=self.current_player_index,
            turn_total=self.turn.turn_total,
            pending_points=self.turn.pending.points,
            available_dice_count=len(self.pool.available_indices()),
            dice=tuple((d.value, d.status) for d in self.pool.dice),
            target_score=self.config.target_score,
            opening_score=self.config.opening_score,
            needs_opening_score=needs_opening,
            roll_count=self.turn.roll_count,
            message=self.message,
            winner=self.winner,
            bracket=tuple(replace(m) for m in tournament.bracket) if tournament else (),
            champion=tournament.champion if tournament else None,
        )

    # -- Events ----------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback receiving every EventPayload."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: GameEvent, message: str = "", **data) -> None:
        player_name = self.current_player.name if self.players else None
        if message:
            self.message = message
        payload = EventPayload(
            event=event,
            player_name=player_name,
            message=message,
            data=data,
        )
        logger.debug("%s (%s): %s", event.name, player_name, message)
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Event listener failed on %s", event.name)

    def _reject(self, message: str) -> bool:
        logger.debug("Rejected in %s: %s", self.phase.value, message)
        self._emit(GameEvent.ACTION_REJECTED, message)
        return False

    # -- Turn cycle ------------------------------------------------------

    def start_turn(self) -> bool:
        """
        Begin the current player's turn with all six dice available.

        Only allowed before the turn's first roll; a turn under way has to
        end by banking, passing or busting. Automated players take their
        whole turn (and any automated players after them) before this
        returns.

        Returns:
            True if the turn started, False if it was rejected

        Raises:
            ValueError: If no players are seated
        """
        if not self.players:
            raise ValueError("No players are seated. Start a tournament first.")
        if self.is_over:
            return self._reject("The game is over.")
        if self.phase is not GamePhase.AWAITING_ROLL or self.turn.roll_count > 0:
            return self._reject("The turn is already under way.")

        self._begin_turn()
        return True

    def _begin_turn(self) -> None:
        self.turn_number += 1
        self.turn = TurnState()
        self.pool.reset_all()
        player = self.current_player
        logger.info("Turn %d: %s (%d points)", self.turn_number, player.name, player.total_score)
        self._emit(
            GameEvent.TURN_STARTED,
            f"{player.name.upper()}'S TURN",
            turn_number=self.turn_number,
        )
        self._run_automated_turns()

    def _run_automated_turns(self) -> None:
        """Play automated turns back to back until a person is up or the game ends."""
        if self._automation_active:
            return
        self._automation_active = True
        try:
            while self.phase is GamePhase.AWAITING_ROLL and self.current_player.is_automated:
                turn_number = self.turn_number
                self.autopilot.play_turn(self)
                if self.turn_number == turn_number and not self.is_over:
                    logger.warning("%s's automated turn did not finish; passing", self.current_player.name)
                    self.pass_turn()
        finally:
            self._automation_active = False

    def _dice_for_next_roll(self) -> int:
        """Dice the next roll will use: the uncommitted ones, or all six on hot dice."""
        remaining = len(self.pool.available_indices())
        return remaining or self.pool.NUM_DICE

    def roll(self, values: Sequence[int] | None = None) -> bool:
        """
        Commit the current selection and roll the remaining dice.

        Args:
            values: Faces for the rolled dice in slot order (scripted play).
                None uses the pool's roller.

        Returns:
            True if the roll happened (including a bust), False if rejected

        Raises:
            ValueError: If scripted faces are invalid or the wrong count
        """
        if self._is_rolling:
            return self._reject("The dice are still rolling.")
        if self.phase not in _ROLLABLE_PHASES:
            return self._reject("Thou cannot roll now.")
        if self.phase is GamePhase.SELECTING and self.turn.pending.points == 0:
            return self._reject("Select at least one scoring die!")

        if values is not None:
            count = self._dice_for_next_roll()
            validate_dice_values(values, min_count=count, max_count=count)

        self._is_rolling = True
        try:
            turn_total = self.turn.live_score
            self.pool.lock_selected()
            if self.pool.all_committed():
                self.pool.reset_all()
                logger.info("%s has hot dice with %d points", self.current_player.name, turn_total)
                self._emit(GameEvent.HOT_DICE, "HOT DICE! Roll all 6 again!", turn_total=turn_total)

            self.turn = replace(
                self.turn,
                turn_total=turn_total,
                pending=ScoreResult(),
                phase=GamePhase.ROLLING,
                roll_count=self.turn.roll_count + 1,
            )
            roll = self.pool.roll_available(values)
            result = FarkleScoring.calculate_score(roll)
            busted = result.points == 0
            if not busted:
                self.turn = replace(self.turn, phase=GamePhase.SELECTING)
        finally:
            self._is_rolling = False

        if busted:
            self._handle_bust(roll.values)
        else:
            self._emit(
                GameEvent.DICE_ROLLED,
                "Select scoring dice to keep.",
                dice=roll.values,
                best_points=result.points,
            )
        return True

    def _handle_bust(self, faces: tuple[int, ...]) -> None:
        player = self.current_player
        lost = self.turn.turn_total
        self.turn = TurnState(phase=GamePhase.TURN_OVER, roll_count=self.turn.roll_count)
        self.history.append(HistoryEntry(player.name, 0, was_bust=True))
        logger.info("%s farkled on %s, losing %d points", player.name, faces, lost)
        self._emit(
            GameEvent.PLAYER_BUST,
            f"FARKLE! {player.name} loses {lost} Gold.",
            dice=faces,
            points_lost=lost,
        )
        self._advance_player()

    def toggle_die_selection(self, index: int) -> int:
        """
        Select or deselect one die and re-score the selection.

        Every selected die must be part of a scoring combination; otherwise
        the whole selection is worth nothing until corrected.

        Returns:
            The pending score after the change

        Raises:
            ValueError: If index is out of range
        """
        validate_die_index(index, len(self.pool))
        if self.phase is not GamePhase.SELECTING:
            self._reject("Roll the dice before choosing any.")
            return self.turn.pending.points
        if not self.pool.toggle_selection(index):
            self._reject("That die is locked from an earlier roll.")
            return self.turn.pending.points

        selected = self.pool.selected_values()
        result = FarkleScoring.calculate_score(selected)
        if result.used_count == len(selected):
            self.turn = replace(self.turn, pending=result)
            self._emit(
                GameEvent.SELECTION_CHANGED,
                f"Selection worth {result.points} Gold.",
                selected=selected,
                pending_points=result.points,
            )
        else:
            self.turn = replace(self.turn, pending=ScoreResult())
            self._emit(
                GameEvent.INVALID_SELECTION,
                "Every chosen die must score.",
                selected=selected,
                pending_points=0,
            )
        return self.turn.pending.points

    def bank(self) -> bool:
        """
        Add the turn's points to the current player's total and end the turn.

        Returns:
            True if banked, False if rejected
        """
        if self.phase is not GamePhase.SELECTING:
            return self._reject("There is nothing to bank yet.")
        if self.turn.pending.points == 0:
            return self._reject("Select scoring dice before banking.")

        player = self.current_player
        banked = self.turn.live_score
        if (
            self.config.opening_score_rule
            and not player.has_opened_account
            and banked < self.config.opening_score
        ):
            return self._reject(f"Minimum {self.config.opening_score} Gold to open thy account.")

        self.pool.lock_selected()
        player.total_score += banked
        player.has_opened_account = True
        self.turn = replace(
            self.turn,
            turn_total=banked,
            pending=ScoreResult(),
            phase=GamePhase.TURN_OVER,
        )
        self.history.append(HistoryEntry(player.name, banked))
        logger.info("%s banked %d (total %d)", player.name, banked, player.total_score)
        self._emit(
            GameEvent.TURN_BANKED,
            f"{player.name} banks {banked} Gold.",
            points=banked,
            total_score=player.total_score,
        )

        if player.total_score >= self.config.target_score:
            if self.tournament is not None:
                self._resolve_match(player)
            else:
                self._finish(player)
        else:
            self._advance_player()
        return True

    def pass_turn(self) -> bool:
        """
        Give up the current turn without banking.

        Returns:
            True if the turn was passed, False if rejected
        """
        if self.phase not in _ROLLABLE_PHASES:
            return self._reject("There is no turn to pass.")

        player = self.current_player
        self.turn = TurnState(phase=GamePhase.TURN_OVER, roll_count=self.turn.roll_count)
        self.history.append(HistoryEntry(player.name, 0))
        self._emit(GameEvent.TURN_PASSED, f"{player.name} passes the dice.")
        self._advance_player()
        return True

    def _advance_player(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        self._emit(
            GameEvent.TURN_ADVANCED,
            current_player_index=self.current_player_index,
        )
        self._begin_turn()

    def _finish(self, winner: Player) -> None:
        self.winner = winner.name
        self.turn = replace(self.turn, phase=GamePhase.GAME_OVER)
        logger.info("%s wins with %d points", winner.name, winner.total_score)
        self._emit(
            GameEvent.GAME_WON,
            f"{winner.name} claims the gold!",
            scores={p.name: p.total_score for p in self.players},
        )

    # -- Tournament ------------------------------------------------------

    def start_tournament(
        self,
        names: Sequence[str],
        human_seats: Sequence[int] = (0,),
    ) -> None:
        """
        Seat four competitors in a bracket and start the first semifinal.

        Args:
            names: Four unique names; names[0] v names[1] and names[2] v names[3]
            human_seats: Positions in names played by people (empty for an
                all-automated bracket)

        Raises:
            ValueError: If the game is not in tournament mode or names are invalid
        """
        if self.config.mode is not GameMode.TOURNAMENT:
            raise ValueError("Tournaments need a game configured with GameMode.TOURNAMENT.")

        self.tournament = Tournament.create(names, human_seats)
        self.history.clear()
        logger.info("Tournament bracket: %s", self.tournament.bracket)
        self.start_match(0)

    def start_match(self, index: int) -> None:
        """
        Seat the two competitors of a bracket match and begin its first turn.

        Raises:
            ValueError: If there is no tournament or the match cannot start
        """
        if self.tournament is None:
            raise ValueError("No tournament in progress.")

        match = self.tournament.begin(index)
        self.players = [
            Player(name, is_automated=self.tournament.is_automated(name))
            for name in match.competitors
        ]
        self.current_player_index = 0
        self.winner = None
        self.turn = TurnState()
        self._emit(
            GameEvent.MATCH_STARTED,
            f"MATCH: {match.player1} VS {match.player2}",
            match_index=index,
        )
        self._begin_turn()

    def _resolve_match(self, winner: Player) -> None:
        tournament = self.tournament
        index = tournament.current_match_index
        next_index = tournament.record_winner(winner.name)
        self.winner = winner.name
        logger.info("%s wins match %d", winner.name, index)
        self._emit(
            GameEvent.MATCH_WON,
            f"{winner.name} wins match {index + 1}!",
            match_index=index,
            finalists=tournament.finalists,
        )

        if next_index is None:
            self.turn = replace(self.turn, phase=GamePhase.GAME_OVER)
            self._emit(
                GameEvent.TOURNAMENT_WON,
                f"{winner.name} IS THE KINGDOM CHAMPION!",
                champion=winner.name,
            )
        else:
            self.start_match(next_index)
