"""
Tavern Farkle - Presentation Models

Pydantic models of what a front end renders: dice, scoreboard, history,
bracket and the Oracle's advice. Built from a GameSnapshot so the front end
never reaches into engine objects.
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field

from src.engine.base import HistoryEntry
from src.engine.game import GameSnapshot


class DieView(BaseModel):
    """One die slot."""

    index: int = Field(ge=0, le=5)
    value: int = Field(ge=1, le=6)
    status: str

    model_config = {"frozen": True}


class PlayerView(BaseModel):
    """One row of the scoreboard."""

    name: str
    total_score: int = Field(default=0, ge=0)
    is_automated: bool = False
    has_opened_account: bool = False
    is_current: bool = False

    model_config = {"frozen": True}


class HistoryView(BaseModel):
    """One completed turn."""

    player_name: str
    points_banked: int = Field(default=0, ge=0)
    was_bust: bool = False

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def label(self) -> str:
        if self.was_bust:
            return f"{self.player_name}: FARKLE!"
        return f"{self.player_name}: +{self.points_banked} Gold"


class MatchView(BaseModel):
    """One bracket match."""

    player1: str | None = None
    player2: str | None = None
    winner: str | None = None

    model_config = {"from_attributes": True, "frozen": True}


class GameView(BaseModel):
    """Everything a front end needs to draw the table."""

    phase: str
    current_player: str | None = None
    players: list[PlayerView] = Field(default_factory=list)
    dice: list[DieView] = Field(default_factory=list)
    turn_score: int = 0
    target_score: int
    message: str = ""
    advice: str = ""
    opening_score_notice: str | None = None
    history: list[HistoryView] = Field(default_factory=list)
    bracket: list[MatchView] = Field(default_factory=list)
    winner: str | None = None
    champion: str | None = None

    @classmethod
    def from_snapshot(
        cls,
        snapshot: GameSnapshot,
        history: Sequence[HistoryEntry] = (),
        advice: str = "",
    ) -> "GameView":
        """Build the view from a game snapshot, newest history first."""
        current = snapshot.current_player
        notice = None
        if snapshot.needs_opening_score:
            if snapshot.live_score >= snapshot.opening_score:
                notice = "Thou art worthy!"
            else:
                notice = f"Minimum {snapshot.opening_score} Gold"

        return cls(
            phase=snapshot.phase.value,
            current_player=current.name if current else None,
            players=[
                PlayerView(
                    name=p.name,
                    total_score=p.total_score,
                    is_automated=p.is_automated,
                    has_opened_account=p.has_opened_account,
                    is_current=i == snapshot.current_player_index,
                )
                for i, p in enumerate(snapshot.players)
            ],
            dice=[
                DieView(index=i, value=value, status=status.value)
                for i, (value, status) in enumerate(snapshot.dice)
            ],
            turn_score=snapshot.live_score,
            target_score=snapshot.target_score,
            message=snapshot.message,
            advice=advice,
            opening_score_notice=notice,
            history=[HistoryView.model_validate(entry) for entry in reversed(history)],
            bracket=[MatchView.model_validate(match) for match in snapshot.bracket],
            winner=snapshot.winner,
            champion=snapshot.champion,
        )
