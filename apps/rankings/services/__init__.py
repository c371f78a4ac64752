"""
Rankings services - Business logic layer.

This module provides services for ranking drinks inside quality tiers:
placement by comparison, direct insertion, reordering and removal.
"""

from .ranking_management import (
    validate_tier,
    validate_rank,
    resolve_tier_order,
    insert_ranking,
    reorder_tier,
    delete_ranking,
    recalculate_tier_scores,
)

from .ranking_queries import (
    get_user_rankings,
    get_tier_rankings,
    get_unranked_drinks,
    get_tier_counts,
    check_drink_ranking,
    get_tier_version,
    get_tier_snapshot,
    get_ranking,
)

from .placement import (
    PlacementSession,
    start_placement,
    replay_placement,
    confirm_placement,
)

from .exceptions import (
    RankingsServiceError,
    RankingValidationError,
    InvalidTierError,
    InvalidRankError,
    PlacementStateError,
    DrinkNotFoundError,
    RankingNotFoundError,
    DuplicateRankingError,
    ConcurrencyConflictError,
    StalePlacementError,
    RankingStorageError,
)

__all__ = [
    # Ranking Management Services
    'validate_tier',
    'validate_rank',
    'resolve_tier_order',
    'insert_ranking',
    'reorder_tier',
    'delete_ranking',
    'recalculate_tier_scores',
    # Ranking Query Services
    'get_user_rankings',
    'get_tier_rankings',
    'get_unranked_drinks',
    'get_tier_counts',
    'check_drink_ranking',
    'get_tier_version',
    'get_tier_snapshot',
    'get_ranking',
    # Placement
    'PlacementSession',
    'start_placement',
    'replay_placement',
    'confirm_placement',
    # Exceptions
    'RankingsServiceError',
    'RankingValidationError',
    'InvalidTierError',
    'InvalidRankError',
    'PlacementStateError',
    'DrinkNotFoundError',
    'RankingNotFoundError',
    'DuplicateRankingError',
    'ConcurrencyConflictError',
    'StalePlacementError',
    'RankingStorageError',
]
