"""
Comparison placement - find a new drink's rank by asking "which is better?".

The engine is a binary search over a snapshot of the tier. Each answer
halves the window of possible ranks, so placing a drink into a tier of N
takes at most ceil(log2(N + 1)) comparisons.

PlacementSession itself touches no database. The HTTP API is stateless, so
a client keeps its answers and sends them all back; replay_placement
rebuilds the session from them and confirm_placement commits the result
through insert_ranking, guarded by the tier version of the snapshot.
"""

import math
from typing import Any, Iterable, Optional, Sequence
from uuid import UUID

from apps.accounts.models import User
from apps.drinks.services import get_drink
from apps.drinks.services import DrinkNotFoundError as DrinkLookupError
from apps.rankings.models import DrinkRanking, QualityTier
from .exceptions import (
    DrinkNotFoundError,
    DuplicateRankingError,
    PlacementStateError,
    StalePlacementError,
)
from .ranking_management import insert_ranking, validate_tier
from .ranking_queries import get_tier_snapshot


class PlacementSession:
    """
    Binary-search placement of one drink into an ordered tier.

    `ranked` is the tier in rank order (best first). Items can be anything;
    the services pass DrinkRanking rows, tests pass plain values.

    The search window is [low, high): the new drink belongs somewhere
    between index `low` and index `high` of `ranked`. When the window is
    empty the drink goes at index `low`, i.e. rank low + 1.
    """

    def __init__(
        self,
        *,
        tier: str,
        ranked: Sequence[Any] = (),
        drink_id: Optional[UUID] = None,
        snapshot_version: Optional[int] = None,
    ):
        self.tier = tier
        self.ranked = tuple(ranked)
        self.drink_id = drink_id
        self.snapshot_version = snapshot_version
        self.low = 0
        self.high = len(self.ranked)
        self.current_index = self.high // 2
        self.comparisons_made = 0
        self.choices: list[bool] = []
        self.cancelled = False

    @property
    def total(self) -> int:
        return len(self.ranked)

    @property
    def is_complete(self) -> bool:
        return not self.cancelled and self.low >= self.high

    @property
    def final_rank(self) -> Optional[int]:
        """1-based rank for the new drink once the search is done."""
        if not self.is_complete:
            return None
        return self.low + 1

    @property
    def estimated_comparisons(self) -> int:
        """Upper bound on the comparisons needed: ceil(log2(total + 1))."""
        return math.ceil(math.log2(self.total + 1))

    @property
    def comparison(self) -> Any:
        """The ranked item the new drink should be compared with next."""
        if self.cancelled or self.is_complete:
            return None
        return self.ranked[self.current_index]

    def record_choice(self, new_is_better: bool) -> Optional[int]:
        """
        Record one answer and narrow the window.

        Returns the final rank once the search is complete, otherwise None.

        Raises:
            PlacementStateError: If the session is complete or cancelled
        """
        if self.cancelled:
            raise PlacementStateError("Placement was cancelled")
        if self.is_complete:
            raise PlacementStateError("Placement is already complete")

        if new_is_better:
            self.high = self.current_index
        else:
            self.low = self.current_index + 1

        self.current_index = (self.low + self.high) // 2
        self.comparisons_made += 1
        self.choices.append(bool(new_is_better))
        return self.final_rank

    def cancel(self) -> None:
        """Abandon the placement. Nothing is written."""
        self.cancelled = True
        self.ranked = ()
        self.choices = []
        self.low = self.high = self.current_index = 0

    @classmethod
    def replay(
        cls,
        *,
        tier: str,
        ranked: Sequence[Any],
        choices: Iterable[bool],
        drink_id: Optional[UUID] = None,
        snapshot_version: Optional[int] = None,
    ) -> 'PlacementSession':
        """Rebuild a session by re-applying answers in order."""
        session = cls(tier=tier, ranked=ranked, drink_id=drink_id, snapshot_version=snapshot_version)
        for choice in choices:
            session.record_choice(choice)
        return session


def start_placement(*, user: User, drink_id: UUID, tier: Optional[str] = None) -> PlacementSession:
    """
    Open a placement session for an unranked drink.

    The tier defaults to the drink's stored tier, then to good.

    Raises:
        DrinkNotFoundError: If drink doesn't exist or belongs to another user
        DuplicateRankingError: If drink is already ranked
        InvalidTierError: If tier is invalid
    """
    try:
        drink = get_drink(drink_id=drink_id, user=user)
    except DrinkLookupError:
        raise DrinkNotFoundError("Drink not found")

    if DrinkRanking.objects.filter(drink=drink).exists():
        raise DuplicateRankingError("Drink is already ranked")

    tier = validate_tier(tier or drink.quality_tier or QualityTier.GOOD.value)
    version, rankings = get_tier_snapshot(user=user, tier=tier)

    return PlacementSession(
        tier=tier,
        ranked=rankings,
        drink_id=drink.id,
        snapshot_version=version,
    )


def replay_placement(
    *,
    user: User,
    drink_id: UUID,
    tier: Optional[str] = None,
    choices: Iterable[bool] = (),
    snapshot_version: Optional[int] = None,
) -> PlacementSession:
    """
    Rebuild a client's placement from its answers so far.

    Raises:
        StalePlacementError: If snapshot_version no longer matches the tier
        PlacementStateError: If answers arrive without the snapshot_version
            they were given against
        PlacementStateError: If there are more answers than comparisons
        (plus everything start_placement raises)
    """
    choices = list(choices)
    if choices and snapshot_version is None:
        raise PlacementStateError("Answers must be sent with the snapshot_version they were given against")

    session = start_placement(user=user, drink_id=drink_id, tier=tier)

    if snapshot_version is not None and snapshot_version != session.snapshot_version:
        raise StalePlacementError(
            f"Your {session.tier} drinks changed since this comparison started. "
            "Please compare again."
        )

    for choice in choices:
        session.record_choice(choice)
    return session


def confirm_placement(*, user: User, session: PlacementSession) -> DrinkRanking:
    """
    Commit a completed placement.

    Raises:
        PlacementStateError: If the session is cancelled or not complete
        StalePlacementError: If the tier changed after the snapshot
        (plus everything insert_ranking raises)
    """
    if session.cancelled:
        raise PlacementStateError("Placement was cancelled")
    if not session.is_complete:
        raise PlacementStateError("Placement needs more comparisons")

    return insert_ranking(
        user=user,
        drink_id=session.drink_id,
        tier=session.tier,
        rank=session.final_rank,
        expected_version=session.snapshot_version,
    )
