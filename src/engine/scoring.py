"""
Tavern Farkle - Scoring Engine

Pure scoring of a set of D6 faces. All methods are stateless class methods
that operate on immutable inputs.

Scoring Rules:
    - Single 1: 100 points
    - Single 5: 50 points
    - Three 1s: 1,000 points
    - Three of X (2-6): X x 100 points
    - Four, five, six of a kind: three-of-a-kind value x 2, x 3, x 4
    - 1-2-3-4-5-6 (Straight): 1,500 points
    - Three pairs: 1,500 points
    - Two triplets: 2,500 points

The three six-dice combinations only apply to exactly six dice and are
checked before multiples, so {2,2,2,5,5,5} is two triplets (2,500) and
never 200 + 500.
"""

from collections import Counter
from typing import Sequence

from src.engine.base import (
    DiceRoll,
    ScoreResult,
    ScoringBreakdown,
    ScoringCategory,
)
from src.engine.validators import validate_dice_values


class FarkleScoring:
    """
    Stateless scoring engine.

    All methods are class methods operating on immutable data.
    """

    NUM_DICE = 6

    # Scoring values
    SINGLE_ONE_POINTS = 100
    SINGLE_FIVE_POINTS = 50
    THREE_ONES_POINTS = 1000
    STRAIGHT_POINTS = 1500
    THREE_PAIRS_POINTS = 1500
    TWO_TRIPLETS_POINTS = 2500

    _MULTIPLE_CATEGORIES = {
        3: ScoringCategory.THREE_OF_A_KIND,
        4: ScoringCategory.FOUR_OF_A_KIND,
        5: ScoringCategory.FIVE_OF_A_KIND,
        6: ScoringCategory.SIX_OF_A_KIND,
    }

    @classmethod
    def _values(cls, dice: Sequence[int] | DiceRoll) -> tuple[int, ...]:
        if isinstance(dice, DiceRoll):
            return dice.values
        return validate_dice_values(dice)

    @classmethod
    def calculate_score(cls, dice: Sequence[int] | DiceRoll) -> ScoreResult:
        """
        Calculate the score for a set of dice.

        Six-dice specials first, then multiples (three or more of a kind),
        then whatever 1s and 5s remain.

        Args:
            dice: Dice values to score (sequence or DiceRoll)

        Returns:
            ScoreResult with points, number of dice used, and breakdown
        """
        values = cls._values(dice)
        if not values:
            return ScoreResult()

        counts = Counter(values)

        special = cls._check_six_dice_specials(values, counts)
        if special is not None:
            return ScoreResult(
                points=special.points,
                used_count=len(values),
                breakdown=(special,),
            )

        breakdown = cls._check_multiples(counts)
        breakdown.extend(cls._check_singles(counts))

        return ScoreResult(
            points=sum(item.points for item in breakdown),
            used_count=sum(len(item.dice_values) for item in breakdown),
            breakdown=tuple(breakdown),
        )

    @classmethod
    def _check_six_dice_specials(
        cls,
        values: tuple[int, ...],
        counts: Counter[int]
    ) -> ScoringBreakdown | None:
        """
        Check the combinations that consume all six dice.

        Returns:
            The matching breakdown, or None
        """
        if len(values) != cls.NUM_DICE:
            return None

        if len(counts) == 6:
            return ScoringBreakdown(
                category=ScoringCategory.STRAIGHT,
                dice_values=(1, 2, 3, 4, 5, 6),
                points=cls.STRAIGHT_POINTS,
                description="Straight (1-2-3-4-5-6)"
            )

        occurrences = list(counts.values())
        if occurrences.count(2) == 3:
            return ScoringBreakdown(
                category=ScoringCategory.THREE_PAIRS,
                dice_values=tuple(sorted(values)),
                points=cls.THREE_PAIRS_POINTS,
                description="Three Pairs"
            )

        if occurrences.count(3) == 2:
            return ScoringBreakdown(
                category=ScoringCategory.TWO_TRIPLETS,
                dice_values=tuple(sorted(values)),
                points=cls.TWO_TRIPLETS_POINTS,
                description="Two Triplets"
            )

        return None

    @classmethod
    def _check_multiples(cls, counts: Counter[int]) -> list[ScoringBreakdown]:
        """
        Score three or more of a kind and consume those dice from counts.

        Each die beyond three adds another multiple of the three-of-a-kind
        value: four of a kind is x2, five x3, six x4.
        """
        breakdown: list[ScoringBreakdown] = []

        for face_value in range(1, 7):
            count = counts[face_value]
            if count < 3:
                continue

            if face_value == 1:
                base_points = cls.THREE_ONES_POINTS
            else:
                base_points = face_value * 100

            breakdown.append(ScoringBreakdown(
                category=cls._MULTIPLE_CATEGORIES[count],
                dice_values=tuple([face_value] * count),
                points=base_points * (count - 2),
                description=f"{count}x {face_value}s"
            ))
            counts[face_value] = 0

        return breakdown

    @classmethod
    def _check_singles(cls, counts: Counter[int]) -> list[ScoringBreakdown]:
        """
        Score remaining single 1s and 5s.

        Only 1s and 5s score as singles.
        """
        breakdown: list[ScoringBreakdown] = []

        ones_count = counts[1]
        if ones_count > 0:
            breakdown.append(ScoringBreakdown(
                category=ScoringCategory.SINGLE_ONE,
                dice_values=tuple([1] * ones_count),
                points=ones_count * cls.SINGLE_ONE_POINTS,
                description=f"{ones_count}x Single 1{'s' if ones_count > 1 else ''}"
            ))
            counts[1] = 0

        fives_count = counts[5]
        if fives_count > 0:
            breakdown.append(ScoringBreakdown(
                category=ScoringCategory.SINGLE_FIVE,
                dice_values=tuple([5] * fives_count),
                points=fives_count * cls.SINGLE_FIVE_POINTS,
                description=f"{fives_count}x Single 5{'s' if fives_count > 1 else ''}"
            ))
            counts[5] = 0

        return breakdown

    @classmethod
    def scoring_indices(cls, dice: Sequence[int] | DiceRoll) -> frozenset[int]:
        """
        Find which dice take part in some scoring combination.

        Uses the same precedence as calculate_score: when a six-dice
        special applies every index scores; otherwise every die of a
        multiple plus the remaining 1s and 5s.

        Args:
            dice: Dice values to inspect

        Returns:
            Indices into dice of the scoring dice
        """
        values = cls._values(dice)
        if not values:
            return frozenset()

        counts = Counter(values)
        if cls._check_six_dice_specials(values, counts) is not None:
            return frozenset(range(len(values)))

        multiples = {face for face, count in counts.items() if count >= 3}
        return frozenset(
            i for i, v in enumerate(values)
            if v in multiples or v in (1, 5)
        )

    @classmethod
    def has_scoring_dice(cls, dice: Sequence[int] | DiceRoll) -> bool:
        """Returns True if at least one scoring combination is present."""
        return cls.calculate_score(dice).points > 0

    @classmethod
    def is_bust(cls, dice: Sequence[int] | DiceRoll) -> bool:
        """
        Check if a roll is a bust (no scoring dice).

        Args:
            dice: Dice values to check

        Returns:
            True if the roll contains no scoring combinations
        """
        return not cls.has_scoring_dice(dice)
