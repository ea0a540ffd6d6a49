"""
Tavern Farkle - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
These guard against programming errors; illegal moves during play are
rejected by the state machine without raising.
"""

from typing import Sequence


def validate_dice_values(
    values: Sequence[int],
    min_count: int = 0,
    max_count: int | None = 6
) -> tuple[int, ...]:
    """
    Validate and normalize dice values.

    Args:
        values: Sequence of dice values to validate
        min_count: Minimum number of dice required
        max_count: Maximum number of dice allowed (None = no limit)

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= 6):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and 6."
            )

    return values_tuple


def validate_die_index(index: int, dice_count: int) -> int:
    """
    Validate the index of a die in the pool.

    Raises:
        ValueError: If the index is not an integer in range
    """
    if not isinstance(index, int) or isinstance(index, bool):
        raise ValueError(f"Die index must be an integer, got {type(index).__name__}.")
    if not (0 <= index < dice_count):
        raise ValueError(
            f"Die index {index} is out of range. Must be between 0 and {dice_count - 1}."
        )
    return index


def validate_player_names(
    names: Sequence[str],
    min_count: int = 2,
    max_count: int | None = None
) -> tuple[str, ...]:
    """
    Validate a list of player names.

    Names must be non-empty after stripping whitespace and unique.

    Returns:
        Stripped names as a tuple

    Raises:
        ValueError: If the count is wrong or a name is blank or repeated
    """
    cleaned = tuple(str(name).strip() for name in names)
    count = len(cleaned)

    if count < min_count:
        raise ValueError(f"At least {min_count} players required, got {count}.")
    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} players allowed, got {count}.")

    for i, name in enumerate(cleaned):
        if not name:
            raise ValueError(f"Player name at index {i} is blank.")
    if len(set(cleaned)) != count:
        raise ValueError("Player names must be unique.")

    return cleaned
