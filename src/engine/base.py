"""
Tavern Farkle - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Value objects are immutable (frozen dataclasses) so a turn
can be replaced wholesale on every transition and never half-updated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.config.settings import Settings


class DieStatus(Enum):
    """Tri-state status of a single die."""
    AVAILABLE = "available"  # may be rolled or selected
    SELECTED = "selected"    # chosen this roll, not yet committed
    LOCKED = "locked"        # committed from a prior roll this turn


class GamePhase(Enum):
    """Phases of the turn/game state machine."""
    AWAITING_ROLL = "awaiting_roll"
    ROLLING = "rolling"
    SELECTING = "selecting"
    TURN_OVER = "turn_over"
    GAME_OVER = "game_over"


class GameMode(Enum):
    """Available game modes."""
    VS_COMPUTER = "vs_computer"
    HEAD_TO_HEAD = "head_to_head"
    TOURNAMENT = "tournament"


class Difficulty(Enum):
    """Automated player difficulty, valued by its risk multiplier."""
    EASY = 0.7
    MEDIUM = 1.0
    HARD = 1.2

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Look up a difficulty by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(d.name.lower() for d in cls)
            raise ValueError(f"Unknown difficulty {name!r}. Must be one of: {valid}.") from None


class TurnAction(Enum):
    """Decision between risking another roll and banking."""
    CONTINUE = "continue"
    BANK = "bank"


class ScoringCategory(Enum):
    """Categories of scoring combinations."""
    SINGLE_ONE = auto()
    SINGLE_FIVE = auto()
    THREE_OF_A_KIND = auto()
    FOUR_OF_A_KIND = auto()
    FIVE_OF_A_KIND = auto()
    SIX_OF_A_KIND = auto()
    STRAIGHT = auto()        # 1-2-3-4-5-6
    THREE_PAIRS = auto()
    TWO_TRIPLETS = auto()


@dataclass(frozen=True)
class ScoringBreakdown:
    """
    A single scoring component within a roll.

    Attributes:
        category: The type of scoring combination
        dice_values: The dice that contributed to this score
        points: Points awarded for this combination
        description: Human-readable description
    """
    category: ScoringCategory
    dice_values: tuple[int, ...]
    points: int
    description: str


@dataclass(frozen=True)
class ScoreResult:
    """
    Complete scoring result for a set of dice.

    Attributes:
        points: Total points scored
        used_count: Number of dice that took part in a scoring combination
        breakdown: Individual scoring components
    """
    points: int = 0
    used_count: int = 0
    breakdown: tuple[ScoringBreakdown, ...] = field(default_factory=tuple)

    @property
    def is_bust(self) -> bool:
        """Returns True if nothing scored."""
        return self.points == 0

    def __str__(self) -> str:
        if self.is_bust:
            return "FARKLE! No scoring dice."
        lines = [f"Total: {self.points} points"]
        for item in self.breakdown:
            lines.append(f"  - {item.description}: {item.points}")
        return "\n".join(lines)


@dataclass(frozen=True)
class DiceRoll:
    """
    Immutable representation of a dice roll.

    Attributes:
        values: Tuple of dice face values
    """
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate dice values are within valid range."""
        for value in self.values:
            if not (1 <= value <= 6):
                raise ValueError(
                    f"Invalid die value {value}. Must be between 1 and 6."
                )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]


@dataclass(frozen=True)
class TurnState:
    """
    Complete state of a player's turn.

    Attributes:
        turn_total: Points from completed rolls this turn (not yet banked)
        pending: Score of the currently selected dice, not yet committed
        phase: Where the turn is in the roll/select/bank cycle
        roll_count: Number of rolls taken this turn
    """
    turn_total: int = 0
    pending: ScoreResult = field(default_factory=ScoreResult)
    phase: GamePhase = GamePhase.AWAITING_ROLL
    roll_count: int = 0

    @property
    def live_score(self) -> int:
        """Turn total including the pending selection."""
        return self.turn_total + self.pending.points


@dataclass(frozen=True)
class HistoryEntry:
    """One completed turn."""
    player_name: str
    points_banked: int
    was_bust: bool = False


TARGET_SCORE_PRESETS = frozenset({3000, 5000, 10000})


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game session.

    Attributes:
        mode: Head-to-head, against the computer, or a 4-player tournament
        target_score: Score needed to win
        difficulty: Risk appetite of automated players
        opening_score_rule: Whether a player's first bank must reach opening_score
        opening_score: Minimum first bank when the rule is enabled
        ai_max_rolls: Hard cap on rolls in a single automated turn
    """
    mode: GameMode = GameMode.VS_COMPUTER
    target_score: int = 10000
    difficulty: Difficulty = Difficulty.MEDIUM
    opening_score_rule: bool = False
    opening_score: int = 500
    ai_max_rolls: int = 20

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.target_score not in TARGET_SCORE_PRESETS:
            raise ValueError(
                f"Target score must be one of {sorted(TARGET_SCORE_PRESETS)}."
            )
        if self.opening_score < 0:
            raise ValueError(f"Opening score cannot be negative, got {self.opening_score}.")
        if self.ai_max_rolls < 1:
            raise ValueError(f"Automated roll cap must be at least 1, got {self.ai_max_rolls}.")

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        mode: GameMode = GameMode.VS_COMPUTER
    ) -> "GameConfig":
        """Build a game configuration from application settings."""
        return cls(
            mode=mode,
            target_score=settings.target_score,
            difficulty=Difficulty.from_name(settings.difficulty),
            opening_score_rule=settings.opening_score_rule,
            opening_score=settings.opening_score,
            ai_max_rolls=settings.ai_max_rolls,
        )
