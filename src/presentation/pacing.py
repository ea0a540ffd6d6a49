"""
Tavern Farkle - Paced Renderer

Bridges the synchronous engine and a human audience. Every event the game
emits becomes a GameView handed to a render callback, followed by a pause
long enough to read it. The engine's outcome never depends on the pauses;
set the delays to zero for headless play and tests.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from src.config.settings import Settings
from src.engine.events import EventPayload, GameEvent
from src.engine.game import FarkleGame
from src.presentation.models import GameView

logger = logging.getLogger(__name__)

RenderCallback = Callable[[EventPayload, GameView], None]

# Events that only update the table and need no reading time
_SILENT_EVENTS = frozenset({
    GameEvent.SELECTION_CHANGED,
    GameEvent.TURN_ADVANCED,
})


class PacedRenderer:
    """Renders a game event by event, pausing between them.

    Args:
        game: The game to watch.
        render: Callback receiving each event and the view after it.
        message_delay: Seconds to hold an ordinary message.
        roll_delay: Seconds a roll takes to settle.
        bust_delay: Seconds to hold a Farkle before the next player.
        sleep: Pause function (replaceable in tests).
    """

    def __init__(
        self,
        game: FarkleGame,
        render: RenderCallback,
        *,
        message_delay: float = 1.0,
        roll_delay: float = 0.6,
        bust_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._game = game
        self._render = render
        self._sleep = sleep
        self._delays = {
            GameEvent.DICE_ROLLED: roll_delay,
            GameEvent.PLAYER_BUST: roll_delay + bust_delay,
        }
        self._message_delay = message_delay
        self._attached = False

    @classmethod
    def from_settings(
        cls,
        game: FarkleGame,
        render: RenderCallback,
        settings: Settings,
        **kwargs,
    ) -> "PacedRenderer":
        """Create a renderer with the delays from application settings."""
        return cls(
            game,
            render,
            message_delay=settings.message_delay,
            roll_delay=settings.roll_delay,
            bust_delay=settings.bust_delay,
            **kwargs,
        )

    @property
    def is_attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        """Start rendering the game's events."""
        if self._attached:
            logger.warning("Renderer already attached")
            return
        self._game.subscribe(self._on_event)
        self._attached = True

    def detach(self) -> None:
        """Stop rendering."""
        self._game.unsubscribe(self._on_event)
        self._attached = False

    def delay_for(self, event: GameEvent) -> float:
        """Pause that follows rendering an event."""
        if event in _SILENT_EVENTS:
            return 0.0
        return self._delays.get(event, self._message_delay)

    def current_view(self) -> GameView:
        """Build the view of the game as it stands."""
        snapshot = self._game.snapshot()
        return GameView.from_snapshot(
            snapshot,
            history=self._game.history,
            advice=self._game.policy.advice(snapshot),
        )

    def _on_event(self, payload: EventPayload) -> None:
        self._render(payload, self.current_view())
        delay = self.delay_for(payload.event)
        if delay > 0:
            self._sleep(delay)
