"""
Domain exceptions for rankings app.

Every exception carries a machine-readable `code`; views turn it into the
`code` field of the error response.

Exception Hierarchy:
    RankingsServiceError (base)
    ├── RankingValidationError          validation_error
    │   ├── InvalidTierError
    │   ├── InvalidRankError
    │   └── PlacementStateError
    ├── DrinkNotFoundError              not_found
    ├── RankingNotFoundError            not_found
    ├── DuplicateRankingError           duplicate_ranking
    ├── ConcurrencyConflictError        concurrency_conflict
    │   └── StalePlacementError
    └── RankingStorageError             storage_error
"""


class RankingsServiceError(Exception):
    """Base exception for all rankings service errors."""
    code = 'rankings_error'


class RankingValidationError(RankingsServiceError):
    """Missing or malformed input. Nothing was changed."""
    code = 'validation_error'


class InvalidTierError(RankingValidationError):
    """Tier is not one of good, mid, bad."""
    pass


class InvalidRankError(RankingValidationError):
    """Rank is not a positive integer or is outside the tier."""
    pass


class PlacementStateError(RankingValidationError):
    """Placement session used after it finished or was cancelled."""
    pass


class DrinkNotFoundError(RankingsServiceError):
    """Drink does not exist or belongs to another user."""
    code = 'not_found'


class RankingNotFoundError(RankingsServiceError):
    """Drink has no ranking for this user."""
    code = 'not_found'


class DuplicateRankingError(RankingsServiceError):
    """Drink is already ranked."""
    code = 'duplicate_ranking'


class ConcurrencyConflictError(RankingsServiceError):
    """Tier changed under the operation. Rolled back; safe to retry."""
    code = 'concurrency_conflict'


class StalePlacementError(ConcurrencyConflictError):
    """Tier was modified after the placement session took its snapshot."""
    pass


class RankingStorageError(RankingsServiceError):
    """Database failure. Rolled back."""
    code = 'storage_error'
