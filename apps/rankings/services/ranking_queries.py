"""Ranking query service - read-only views of a user's tiers."""

from typing import Optional
from uuid import UUID

from django.db.models import Count, QuerySet, Value
from django.db.models.functions import Coalesce

from apps.accounts.models import User
from apps.drinks.models import Drink
from apps.rankings.models import DrinkRanking, RankingTier, QualityTier
from .ranking_management import validate_tier


def get_user_rankings(*, user: User) -> QuerySet[DrinkRanking]:
    """All of the user's rankings, best score first."""
    return (
        DrinkRanking.objects
        .filter(user=user)
        .select_related('drink', 'drink__cafe')
        .order_by('-score', '-created_at')
    )


def get_tier_rankings(*, user: User, tier: str) -> QuerySet[DrinkRanking]:
    """
    One tier in rank order.

    Raises:
        InvalidTierError: If tier is invalid
    """
    tier = validate_tier(tier)
    return (
        DrinkRanking.objects
        .filter(user=user, quality_tier=tier)
        .select_related('drink', 'drink__cafe')
        .order_by('tier_rank')
    )


def get_unranked_drinks(*, user: User) -> QuerySet[Drink]:
    """
    Drinks without a ranking, newest first.

    `suggested_tier` is the drink's stored tier, or good when it has none.
    """
    return (
        Drink.objects
        .filter(user=user, ranking__isnull=True)
        .select_related('cafe')
        .annotate(suggested_tier=Coalesce('quality_tier', Value(QualityTier.GOOD.value)))
        .order_by('-logged_at', '-created_at')
    )


def get_tier_counts(*, user: User) -> dict[str, int]:
    """Number of ranked drinks per tier; tiers with none report 0."""
    counts = {tier: 0 for tier in QualityTier.values}
    rows = (
        DrinkRanking.objects
        .filter(user=user)
        .order_by()
        .values('quality_tier')
        .annotate(count=Count('id'))
    )
    for row in rows:
        counts[row['quality_tier']] = row['count']
    return counts


def check_drink_ranking(*, user: User, drink_id: UUID) -> dict:
    """Whether a drink is ranked, and where."""
    ranking = (
        DrinkRanking.objects
        .filter(user=user, drink_id=drink_id)
        .only('quality_tier', 'tier_rank', 'score')
        .first()
    )
    if ranking is None:
        return {'is_ranked': False, 'rank': None, 'tier': None, 'score': None}

    return {
        'is_ranked': True,
        'rank': ranking.tier_rank,
        'tier': ranking.quality_tier,
        'score': ranking.score,
    }


def get_tier_version(*, user: User, tier: str) -> int:
    """Current change counter of a tier (0 if it was never modified)."""
    tier = validate_tier(tier)
    version = (
        RankingTier.objects
        .filter(user=user, tier=tier)
        .values_list('version', flat=True)
        .first()
    )
    return version or 0


def get_tier_snapshot(*, user: User, tier: str) -> tuple[int, list[DrinkRanking]]:
    """
    Version and ordered rankings of a tier, for comparison-based placement.

    The version is read before the rows. A mutation committing in between
    can only make the snapshot look stale, never make stale rows look fresh.
    """
    version = get_tier_version(user=user, tier=tier)
    rankings = list(get_tier_rankings(user=user, tier=tier))
    return version, rankings


def get_ranking(*, user: User, drink_id: UUID) -> Optional[DrinkRanking]:
    return (
        DrinkRanking.objects
        .filter(user=user, drink_id=drink_id)
        .select_related('drink', 'drink__cafe')
        .first()
    )
