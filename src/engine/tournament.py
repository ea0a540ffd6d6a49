"""
Tavern Farkle - Tournament Bracket

Four competitors, two semifinals, one final. The bracket is fixed before
the first match; winners are filled in as matches complete.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from src.engine.validators import validate_player_names

SEMIFINALS = (0, 1)
FINAL = 2


@dataclass
class Match:
    """One match of the bracket. Final slots are empty until semifinals finish."""
    player1: str | None
    player2: str | None
    winner: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.player1 is not None and self.player2 is not None

    @property
    def is_complete(self) -> bool:
        return self.winner is not None

    @property
    def competitors(self) -> tuple[str, str]:
        if not self.is_ready:
            raise ValueError("Match competitors are not decided yet.")
        return (self.player1, self.player2)  # type: ignore[return-value]


@dataclass
class Tournament:
    """
    Bracket of three matches.

    Attributes:
        bracket: Semifinal 0, semifinal 1, final
        human_names: Competitors controlled by a person; the rest are automated
        current_match_index: Match being played, None between matches
        champion: Winner of the final
    """
    bracket: list[Match]
    human_names: frozenset[str] = field(default_factory=frozenset)
    current_match_index: int | None = None
    champion: str | None = None

    @classmethod
    def create(
        cls,
        names: Sequence[str],
        human_seats: Sequence[int] = (0,)
    ) -> "Tournament":
        """
        Build the bracket: names[0] v names[1], names[2] v names[3].

        Args:
            names: Exactly four unique competitor names
            human_seats: Positions in names played by people

        Raises:
            ValueError: If names are not four unique names or a seat is out of range
        """
        players = validate_player_names(names, min_count=4, max_count=4)
        for seat in human_seats:
            if not (0 <= seat < 4):
                raise ValueError(f"Human seat {seat} is out of range. Must be between 0 and 3.")

        return cls(
            bracket=[
                Match(players[0], players[1]),
                Match(players[2], players[3]),
                Match(None, None),
            ],
            human_names=frozenset(players[seat] for seat in human_seats),
        )

    @property
    def is_complete(self) -> bool:
        return self.champion is not None

    @property
    def finalists(self) -> tuple[str | None, str | None]:
        final = self.bracket[FINAL]
        return (final.player1, final.player2)

    def match(self, index: int) -> Match:
        if not (0 <= index < len(self.bracket)):
            raise ValueError(
                f"Match index {index} is out of range. Must be between 0 and {len(self.bracket) - 1}."
            )
        return self.bracket[index]

    def is_automated(self, name: str) -> bool:
        return name not in self.human_names

    def begin(self, index: int) -> Match:
        """
        Mark a match as the one being played.

        Raises:
            ValueError: If the match is unknown, already decided or not ready,
                or another match is still being played
        """
        if self.current_match_index is not None:
            raise ValueError(f"Match {self.current_match_index} is still in progress.")
        match = self.match(index)
        if match.is_complete:
            raise ValueError(f"Match {index} has already been played.")
        if not match.is_ready:
            raise ValueError(f"Match {index} is waiting for its semifinal winners.")
        self.current_match_index = index
        return match

    def record_winner(self, winner: str) -> int | None:
        """
        Record the winner of the current match and advance the bracket.

        A semifinal winner takes its slot in the final (match 0 feeds
        player1, match 1 feeds player2). The final's winner is champion.

        Returns:
            Index of the next match to play, or None when the tournament is over
        """
        index = self.current_match_index
        if index is None:
            raise ValueError("No match is in progress.")

        match = self.bracket[index]
        if winner not in (match.player1, match.player2):
            raise ValueError(f"{winner!r} is not playing in match {index}.")

        match.winner = winner
        self.current_match_index = None

        if index == FINAL:
            self.champion = winner
            return None

        final = self.bracket[FINAL]
        if index == SEMIFINALS[0]:
            final.player1 = winner
        else:
            final.player2 = winner

        return self.next_match_index()

    def next_match_index(self) -> int | None:
        """First unplayed semifinal, then the final once both slots are filled."""
        for index in SEMIFINALS:
            if not self.bracket[index].is_complete:
                return index
        final = self.bracket[FINAL]
        if final.is_ready and not final.is_complete:
            return FINAL
        return None
