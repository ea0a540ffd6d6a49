"""
Tavern Farkle Presentation Adapter.

View models and paced rendering for front ends.
"""

from src.presentation.models import (
    DieView,
    GameView,
    HistoryView,
    MatchView,
    PlayerView,
)
from src.presentation.pacing import PacedRenderer

__all__ = [
    "DieView",
    "GameView",
    "HistoryView",
    "MatchView",
    "PacedRenderer",
    "PlayerView",
]
