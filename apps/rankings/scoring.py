"""
Tier score calculator.

Maps a drink's position inside its tier to a score on a shared 0-10 scale.
Each tier owns a fixed slice of the scale; rank 1 gets the top of the slice,
the last rank gets the bottom, and the ranks in between are spread evenly.

    good  6.0 - 10.0
    mid   3.0 -  5.9
    bad   0.0 -  2.9
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple

from .models import QualityTier


class ScoreRange(NamedTuple):
    min: Decimal
    max: Decimal


TIER_SCORE_RANGES = {
    QualityTier.GOOD: ScoreRange(Decimal('6.0'), Decimal('10.0')),
    QualityTier.MID: ScoreRange(Decimal('3.0'), Decimal('5.9')),
    QualityTier.BAD: ScoreRange(Decimal('0.0'), Decimal('2.9')),
}

SCORE_QUANTUM = Decimal('0.1')


def get_score_range(tier: str) -> ScoreRange:
    """Score range for a tier. Unknown tiers use the mid range."""
    return TIER_SCORE_RANGES.get(tier, TIER_SCORE_RANGES[QualityTier.MID])


def calculate_score(tier: str, rank: int, total: int) -> Decimal:
    """
    Score of the drink at `rank` (1-based) in a tier holding `total` drinks.

    A lone drink gets the tier maximum. Otherwise the score falls linearly
    from max (rank 1) to min (rank == total), rounded half-up to one decimal.

    >>> calculate_score('good', 2, 4)
    Decimal('8.7')
    """
    score_range = get_score_range(tier)
    if total <= 1:
        return score_range.max

    position = Decimal(rank - 1) / Decimal(total - 1)
    score = score_range.max - position * (score_range.max - score_range.min)
    return score.quantize(SCORE_QUANTUM, rounding=ROUND_HALF_UP)
