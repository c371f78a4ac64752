"""
Ranking management service - insert, reorder and delete tier rankings.

Every mutation follows the same shape:
1. Validate the input that needs no database access
2. Open a transaction and lock the (user, tier) RankingTier row
3. Validate against the locked tier
4. Rewrite ranks through the negative staging space
5. Rescore the whole tier

Ranks are never written straight to their final value. Affected rows are
first moved to `-rank - RANKING_STAGING_OFFSET`, which is disjoint from the
live 1..N range, then written to their final ranks. The unique
(user, quality_tier, tier_rank) constraint never sees a transient collision.
"""

import logging
from contextlib import contextmanager
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, DatabaseError, IntegrityError, OperationalError
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import User
from apps.drinks.services import get_drink, set_drink_tier
from apps.drinks.services import DrinkNotFoundError as DrinkLookupError
from apps.rankings.models import DrinkRanking, RankingTier, QualityTier
from apps.rankings.scoring import calculate_score
from .exceptions import (
    RankingValidationError,
    InvalidTierError,
    InvalidRankError,
    DrinkNotFoundError,
    RankingNotFoundError,
    DuplicateRankingError,
    ConcurrencyConflictError,
    StalePlacementError,
    RankingStorageError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Validation
# =============================================================================

def validate_tier(tier: Optional[str]) -> str:
    """
    Raises:
        InvalidTierError: If tier is missing or not good/mid/bad
    """
    if not tier:
        raise InvalidTierError("Tier is required")
    if tier not in QualityTier.values:
        raise InvalidTierError(f"Invalid tier '{tier}'. Expected one of: good, mid, bad")
    return str(tier)


def validate_rank(rank) -> int:
    """
    Raises:
        InvalidRankError: If rank is missing or not a positive integer
    """
    if rank is None:
        raise InvalidRankError("Rank is required")
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise InvalidRankError("Rank must be an integer")
    if rank < 1:
        raise InvalidRankError("Rank must be 1 or greater")
    return rank


def _parse_assignments(rankings: Iterable[dict]) -> dict[UUID, int]:
    """Turn [{drink_id, rank}, ...] into {drink_id: rank}, rejecting duplicates."""
    if rankings is None:
        raise RankingValidationError("Rankings list is required")

    assignments: dict[UUID, int] = {}
    for entry in rankings:
        if not isinstance(entry, dict):
            raise RankingValidationError("Every entry needs a drink_id and rank")
        if entry.get('drink_id') is None:
            raise RankingValidationError("Every entry needs a drink_id")
        try:
            drink_id = entry['drink_id'] if isinstance(entry['drink_id'], UUID) else UUID(str(entry['drink_id']))
        except ValueError:
            raise RankingValidationError(f"Invalid drink_id '{entry['drink_id']}'")

        rank = validate_rank(entry.get('rank'))
        if drink_id in assignments:
            raise RankingValidationError(f"Drink {drink_id} appears more than once")
        assignments[drink_id] = rank

    if len(set(assignments.values())) != len(assignments):
        raise InvalidRankError("Each rank can only be assigned once")

    return assignments


def resolve_tier_order(current: list, assignments: dict) -> list:
    """
    Final order of a tier after a full or partial reassignment.

    `current` is the tier's drink ids in rank order; `assignments` maps some
    of them to their requested 1-based rank. Assigned drinks land exactly
    where requested; every other drink keeps its relative order and fills
    the free ranks from the top.

    >>> resolve_tier_order(['a', 'b', 'c', 'd'], {'d': 1})
    ['d', 'a', 'b', 'c']

    Raises:
        InvalidRankError: If a rank is outside 1..len(current) or repeated
    """
    total = len(current)
    slots = [None] * total

    for drink_id, rank in assignments.items():
        if not (1 <= rank <= total):
            raise InvalidRankError(f"Rank {rank} is outside the tier (1-{total})")
        if slots[rank - 1] is not None:
            raise InvalidRankError("Each rank can only be assigned once")
        slots[rank - 1] = drink_id

    unassigned = iter([drink_id for drink_id in current if drink_id not in assignments])
    return [drink_id if drink_id is not None else next(unassigned) for drink_id in slots]


# =============================================================================
# Transaction & locking helpers
# =============================================================================

def _staging_offset() -> int:
    return getattr(settings, 'RANKING_STAGING_OFFSET', 1000)


@contextmanager
def _storage_errors(action: str):
    """Translate database failures into ranking errors."""
    try:
        yield
    except (IntegrityError, OperationalError) as e:
        logger.warning("Conflict while trying to %s: %s", action, e)
        raise ConcurrencyConflictError(
            f"Rankings changed while trying to {action}. Please retry."
        ) from e
    except DatabaseError as e:
        logger.exception("Storage failure while trying to %s", action)
        raise RankingStorageError(f"Could not {action} due to a storage error") from e


def _lock_tier(user: User, tier: str) -> RankingTier:
    tier_state, _ = (
        RankingTier.objects
        .select_for_update()
        .get_or_create(user=user, tier=tier)
    )
    return tier_state


@contextmanager
def _tier_mutation(user: User, tier: str, action: str, expected_version: Optional[int] = None):
    """
    Run the body atomically while holding the (user, tier) lock.

    Yields the locked RankingTier, already bumped to the version this
    mutation will commit as. Any exception rolls the whole body back.

    Raises:
        StalePlacementError: If expected_version no longer matches the tier
    """
    with _storage_errors(action):
        with transaction.atomic():
            tier_state = _lock_tier(user, tier)

            if expected_version is not None and tier_state.version != expected_version:
                raise StalePlacementError(
                    f"Your {tier} drinks changed since this comparison started. "
                    "Please compare again."
                )

            RankingTier.objects.filter(pk=tier_state.pk).update(
                version=F('version') + 1,
                updated_at=timezone.now(),
            )
            tier_state.version += 1

            yield tier_state


# =============================================================================
# Rank rewriting
# =============================================================================

def _shift_ranks(*, user: User, tier: str, start: int, delta: int) -> int:
    """Move every rank >= start by delta. Returns the number of rows moved."""
    offset = _staging_offset()
    tier_rankings = DrinkRanking.objects.filter(user=user, quality_tier=tier)

    moved = tier_rankings.filter(tier_rank__gte=start).update(
        tier_rank=-F('tier_rank') - offset,
    )
    if moved:
        # Staged value s = -rank - offset, so rank + delta = -s - offset + delta
        tier_rankings.filter(tier_rank__lt=0).update(
            tier_rank=-F('tier_rank') - offset + delta,
            updated_at=timezone.now(),
        )
    return moved


def _apply_ranks(new_ranks: dict) -> None:
    """Write final ranks for {ranking pk: rank}."""
    if not new_ranks:
        return

    offset = _staging_offset()
    DrinkRanking.objects.filter(pk__in=new_ranks).update(
        tier_rank=-F('tier_rank') - offset,
    )

    now = timezone.now()
    staged = list(DrinkRanking.objects.filter(pk__in=new_ranks))
    for ranking in staged:
        ranking.tier_rank = new_ranks[ranking.pk]
        ranking.updated_at = now
    DrinkRanking.objects.bulk_update(staged, ['tier_rank', 'updated_at'])


def _rescore_tier(*, user: User, tier: str) -> list[DrinkRanking]:
    """Recompute every score in the tier against its current size."""
    rankings = list(
        DrinkRanking.objects
        .filter(user=user, quality_tier=tier)
        .order_by('tier_rank')
    )
    total = len(rankings)
    now = timezone.now()

    changed = []
    for ranking in rankings:
        score = calculate_score(tier, ranking.tier_rank, total)
        if ranking.score != score:
            ranking.score = score
            ranking.updated_at = now
            changed.append(ranking)

    if changed:
        DrinkRanking.objects.bulk_update(changed, ['score', 'updated_at'])

    return rankings


# =============================================================================
# Public operations
# =============================================================================

def insert_ranking(
    *,
    user: User,
    drink_id: UUID,
    tier: str,
    rank: int,
    expected_version: Optional[int] = None
) -> DrinkRanking:
    """
    Rank a drink at a given position inside a tier.

    This operation:
    1. Validates tier, rank, drink ownership and that the drink is unranked
    2. Shifts every ranking at or below `rank` down one place
    3. Inserts the new ranking and copies the tier onto the drink
    4. Rescores the whole tier for its new size

    Args:
        user: Owner of the drink and the rankings
        drink_id: UUID of the drink to rank
        tier: good, mid or bad
        rank: 1-based position, at most tier size + 1
        expected_version: Tier version the caller's view of the tier was
            taken at (placement sessions). None skips the check.

    Returns:
        The created DrinkRanking with its final score

    Raises:
        InvalidTierError: If tier is invalid
        InvalidRankError: If rank is not within 1..size + 1
        DrinkNotFoundError: If drink doesn't exist or belongs to another user
        DuplicateRankingError: If drink already has a ranking
        StalePlacementError: If the tier moved past expected_version
        ConcurrencyConflictError: If the database reported contention
        RankingStorageError: On any other database failure
    """
    tier = validate_tier(tier)
    rank = validate_rank(rank)

    with _tier_mutation(user, tier, 'add ranking', expected_version=expected_version):
        try:
            drink = get_drink(drink_id=drink_id, user=user)
        except DrinkLookupError:
            raise DrinkNotFoundError("Drink not found")

        if DrinkRanking.objects.filter(drink=drink).exists():
            raise DuplicateRankingError("Drink is already ranked")

        size = DrinkRanking.objects.filter(user=user, quality_tier=tier).count()
        if rank > size + 1:
            raise InvalidRankError(
                f"Rank {rank} is out of range; the {tier} tier holds {size} drinks"
            )

        _shift_ranks(user=user, tier=tier, start=rank, delta=1)

        try:
            ranking = DrinkRanking.objects.create(
                user=user,
                drink=drink,
                quality_tier=tier,
                tier_rank=rank,
                score=calculate_score(tier, rank, size + 1),
            )
        except IntegrityError:
            # Unique drink constraint caught a concurrent insert in another tier
            raise DuplicateRankingError("Drink is already ranked")

        set_drink_tier(drink=drink, tier=tier)
        _rescore_tier(user=user, tier=tier)

    logger.info(
        "User %s ranked drink %s at %s #%d (tier size %d)",
        user.id, drink.id, tier, rank, size + 1,
    )
    return DrinkRanking.objects.select_related('drink', 'drink__cafe').get(pk=ranking.pk)


def reorder_tier(*, user: User, tier: str, rankings: list[dict]) -> list[DrinkRanking]:
    """
    Reassign ranks inside one tier.

    `rankings` is a list of {'drink_id': ..., 'rank': ...}. It may cover the
    whole tier or only some drinks; drinks left out keep their relative
    order and fill the ranks nobody asked for. The rewrite is all-or-nothing.

    Returns:
        The tier's rankings in their new rank order, rescored

    Raises:
        InvalidTierError: If tier is invalid
        RankingValidationError: If an entry is malformed or repeated
        InvalidRankError: If a rank is outside 1..tier size
        RankingNotFoundError: If a drink is not ranked in this tier
        ConcurrencyConflictError: If the database reported contention
        RankingStorageError: On any other database failure
    """
    tier = validate_tier(tier)
    assignments = _parse_assignments(rankings)

    with _tier_mutation(user, tier, 'reorder rankings'):
        current = list(
            DrinkRanking.objects
            .filter(user=user, quality_tier=tier)
            .order_by('tier_rank')
        )
        by_drink = {ranking.drink_id: ranking for ranking in current}

        for drink_id in assignments:
            if drink_id not in by_drink:
                raise RankingNotFoundError(f"Drink {drink_id} is not ranked in the {tier} tier")

        order = resolve_tier_order([ranking.drink_id for ranking in current], assignments)
        new_ranks = {
            by_drink[drink_id].pk: position
            for position, drink_id in enumerate(order, start=1)
            if by_drink[drink_id].tier_rank != position
        }

        _apply_ranks(new_ranks)
        _rescore_tier(user=user, tier=tier)

    logger.info(
        "User %s reordered %s tier: %d of %d drinks moved",
        user.id, tier, len(new_ranks), len(current),
    )
    return list(
        DrinkRanking.objects
        .filter(user=user, quality_tier=tier)
        .select_related('drink', 'drink__cafe')
        .order_by('tier_rank')
    )


def delete_ranking(*, user: User, drink_id: UUID) -> None:
    """
    Remove a drink from its tier.

    Every ranking below the removed one moves up a place and the tier is
    rescored. The drink itself is kept (it becomes unranked).

    Raises:
        RankingNotFoundError: If the drink has no ranking for this user
        ConcurrencyConflictError: If the database reported contention
        RankingStorageError: On any other database failure
    """
    with _storage_errors('remove ranking'):
        tier = (
            DrinkRanking.objects
            .filter(user=user, drink_id=drink_id)
            .values_list('quality_tier', flat=True)
            .first()
        )
    if tier is None:
        raise RankingNotFoundError("Ranking not found")

    with _tier_mutation(user, tier, 'remove ranking'):
        # Re-read under the lock
        try:
            ranking = DrinkRanking.objects.get(user=user, drink_id=drink_id, quality_tier=tier)
        except DrinkRanking.DoesNotExist:
            raise RankingNotFoundError("Ranking not found")

        removed_rank = ranking.tier_rank
        ranking.delete()
        _shift_ranks(user=user, tier=tier, start=removed_rank + 1, delta=-1)
        _rescore_tier(user=user, tier=tier)

    logger.info("User %s removed drink %s from %s #%d", user.id, drink_id, tier, removed_rank)


def recalculate_tier_scores(*, user: User, tier: str) -> list[DrinkRanking]:
    """
    Rescore a tier from its current ranks.

    Mutations already rescore; this is for repairs (admin action).
    """
    tier = validate_tier(tier)
    with _tier_mutation(user, tier, 'recalculate scores'):
        rankings = _rescore_tier(user=user, tier=tier)
    return rankings
