"""
Tavern Farkle Game Engine.

Pure Python game logic with zero UI dependencies.
Handles scoring, the dice pool, turn progression, bust and hot dice
detection, tournaments, and the automated opponent.
"""

from src.engine.automaton import AutomatedPlayer
from src.engine.base import (
    DiceRoll,
    DieStatus,
    Difficulty,
    GameConfig,
    GameMode,
    GamePhase,
    HistoryEntry,
    ScoreResult,
    ScoringBreakdown,
    ScoringCategory,
    TurnAction,
    TurnState,
)
from src.engine.dice import DicePool, Die
from src.engine.events import EventPayload, GameEvent
from src.engine.game import FarkleGame, GameSnapshot, Player
from src.engine.policy import ThresholdPolicy
from src.engine.scoring import FarkleScoring
from src.engine.tournament import Match, Tournament

__all__ = [
    # Data Classes
    "DiceRoll",
    "GameConfig",
    "GameSnapshot",
    "HistoryEntry",
    "Match",
    "Player",
    "ScoreResult",
    "ScoringBreakdown",
    "TurnState",
    # Enums
    "DieStatus",
    "Difficulty",
    "GameEvent",
    "GameMode",
    "GamePhase",
    "ScoringCategory",
    "TurnAction",
    # Engine
    "AutomatedPlayer",
    "DicePool",
    "Die",
    "EventPayload",
    "FarkleGame",
    "FarkleScoring",
    "ThresholdPolicy",
    "Tournament",
]
