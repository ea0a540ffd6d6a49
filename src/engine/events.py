"""
Tavern Farkle - Game Event Definitions

Event types and payloads the state machine emits for the presentation
layer to render.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable


class GameEvent(Enum):
    """Events that can occur during a game."""

    TURN_STARTED = auto()
    DICE_ROLLED = auto()
    HOT_DICE = auto()
    SELECTION_CHANGED = auto()
    INVALID_SELECTION = auto()
    ACTION_REJECTED = auto()
    PLAYER_BUST = auto()
    TURN_BANKED = auto()
    TURN_PASSED = auto()
    TURN_ADVANCED = auto()
    MATCH_STARTED = auto()
    MATCH_WON = auto()
    GAME_WON = auto()
    TOURNAMENT_WON = auto()


@dataclass
class EventPayload:
    """Wrapper for event data."""

    event: GameEvent
    player_name: str | None = None
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[EventPayload], None]
