"""
Tavern Farkle - Dice Pool

The six dice of a game and their Available / Selected / Locked status.
Unlike the value objects in base.py these are mutable: each die keeps its
slot for the whole session and is only ever reset, never replaced.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Sequence

from src.engine.base import DiceRoll, DieStatus
from src.engine.validators import validate_dice_values, validate_die_index

Roller = Callable[[int], Sequence[int]]


def random_roller(count: int) -> tuple[int, ...]:
    """Roll `count` fair D6."""
    return tuple(random.randint(1, 6) for _ in range(count))


@dataclass
class Die:
    """One die slot."""
    index: int
    value: int = 1
    status: DieStatus = DieStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.status is DieStatus.AVAILABLE

    @property
    def is_selected(self) -> bool:
        return self.status is DieStatus.SELECTED

    @property
    def is_locked(self) -> bool:
        return self.status is DieStatus.LOCKED


class DicePool:
    """
    Ordered collection of exactly six dice.

    Args:
        roller: Source of face values, called with the number of dice to
            roll. Defaults to fair random dice.
    """

    NUM_DICE = 6

    def __init__(self, roller: Roller | None = None) -> None:
        self._roller = roller or random_roller
        self.dice: list[Die] = [Die(index=i) for i in range(self.NUM_DICE)]

    def __len__(self) -> int:
        return len(self.dice)

    def __getitem__(self, index: int) -> Die:
        return self.dice[index]

    @property
    def values(self) -> tuple[int, ...]:
        """Face values of all six dice in slot order."""
        return tuple(d.value for d in self.dice)

    @property
    def statuses(self) -> tuple[DieStatus, ...]:
        return tuple(d.status for d in self.dice)

    def available_indices(self) -> tuple[int, ...]:
        return tuple(d.index for d in self.dice if d.is_available)

    def available_values(self) -> tuple[int, ...]:
        return tuple(d.value for d in self.dice if d.is_available)

    def selected_values(self) -> tuple[int, ...]:
        return tuple(d.value for d in self.dice if d.is_selected)

    def locked_values(self) -> tuple[int, ...]:
        return tuple(d.value for d in self.dice if d.is_locked)

    def roll_available(self, values: Sequence[int] | None = None) -> DiceRoll:
        """
        Give every Available die a new face.

        Selected and Locked dice keep their faces.

        Args:
            values: Faces to assign, one per Available die in slot order.
                None rolls them with the pool's roller.

        Returns:
            DiceRoll of the new faces, in slot order

        Raises:
            ValueError: If supplied faces are invalid or the wrong count
        """
        targets = [d for d in self.dice if d.is_available]
        if values is None:
            values = self._roller(len(targets))

        faces = validate_dice_values(values, max_count=None)
        if len(faces) != len(targets):
            raise ValueError(
                f"Expected {len(targets)} faces for the available dice, got {len(faces)}."
            )

        for die, face in zip(targets, faces):
            die.value = face
        return DiceRoll(values=faces)

    def toggle_selection(self, index: int) -> bool:
        """
        Flip a die between Available and Selected.

        Returns:
            False if the die is Locked (nothing changes), True otherwise

        Raises:
            ValueError: If index is out of range
        """
        die = self.dice[validate_die_index(index, len(self.dice))]
        if die.is_locked:
            return False
        die.status = DieStatus.AVAILABLE if die.is_selected else DieStatus.SELECTED
        return True

    def lock_selected(self) -> None:
        """Commit every Selected die."""
        for die in self.dice:
            if die.is_selected:
                die.status = DieStatus.LOCKED

    def reset_all(self) -> None:
        """Make every die Available again."""
        for die in self.dice:
            die.status = DieStatus.AVAILABLE

    def all_committed(self) -> bool:
        """True when no die is Available (hot dice)."""
        return all(not d.is_available for d in self.dice)
