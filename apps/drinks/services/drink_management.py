"""Drink log service - create, fetch, list and delete logged drinks."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.cafes.models import Cafe
from apps.drinks.models import Drink
from apps.rankings.models import QualityTier
from .exceptions import (
    DrinkNotFoundError,
    CafeNotFoundError,
    InvalidDrinkDataError,
)

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    'logged_at': 'logged_at',
    'rating': 'rating',
    'drink_type': 'drink_type',
    'price': 'price',
}


def _validate_rating(rating: Optional[Decimal]) -> Optional[Decimal]:
    if rating is None:
        return None
    rating = Decimal(str(rating))
    if not (Decimal('0') <= rating <= Decimal('5')):
        raise InvalidDrinkDataError("Rating must be between 0 and 5")
    if (rating * 2) % 1 != 0:
        raise InvalidDrinkDataError("Rating must be a multiple of 0.5")
    return rating


def _normalize_tags(flavor_tags: Optional[list[str]]) -> list[str]:
    tags = []
    for tag in flavor_tags or []:
        tag = str(tag).strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


@transaction.atomic
def create_drink(
    *,
    user: User,
    cafe_id: UUID,
    drink_type: str,
    quality_tier: Optional[str] = None,
    rating: Optional[Decimal] = None,
    notes: str = '',
    price: Optional[Decimal] = None,
    flavor_tags: Optional[list[str]] = None,
    photo_url: str = '',
    logged_at: Optional[datetime] = None,
) -> Drink:
    """
    Log a new drink.

    The drink starts unranked; `quality_tier` only records the tier the user
    picked, which the placement flow later uses as the default tier.

    Raises:
        CafeNotFoundError: If cafe doesn't exist
        InvalidDrinkDataError: If drink_type is blank or rating/price/tier invalid
    """
    drink_type = (drink_type or '').strip()
    if not drink_type:
        raise InvalidDrinkDataError("Drink type is required")

    if quality_tier is not None and quality_tier not in QualityTier.values:
        raise InvalidDrinkDataError(f"Invalid tier: {quality_tier}")

    rating = _validate_rating(rating)

    if price is not None and Decimal(str(price)) < 0:
        raise InvalidDrinkDataError("Price cannot be negative")

    try:
        cafe = Cafe.objects.get(id=cafe_id)
    except Cafe.DoesNotExist:
        raise CafeNotFoundError("Cafe not found")

    fields = dict(
        user=user,
        cafe=cafe,
        drink_type=drink_type,
        quality_tier=quality_tier,
        rating=rating,
        notes=notes or '',
        price=price,
        flavor_tags=_normalize_tags(flavor_tags),
        photo_url=photo_url or '',
    )
    if logged_at is not None:
        fields['logged_at'] = logged_at

    drink = Drink.objects.create(**fields)
    logger.info("User %s logged drink %s at cafe %s", user.id, drink.id, cafe.id)
    return drink


def get_drink(*, drink_id: UUID, user: User) -> Drink:
    """
    Retrieve one of the user's drinks.

    Raises:
        DrinkNotFoundError: If drink doesn't exist or belongs to another user
    """
    try:
        return Drink.objects.select_related('cafe').get(id=drink_id, user=user)
    except Drink.DoesNotExist:
        raise DrinkNotFoundError("Drink not found")


def set_drink_tier(*, drink: Drink, tier: str) -> Drink:
    """Write the denormalized tier onto the drink (caller owns the transaction)."""
    Drink.objects.filter(pk=drink.pk).update(quality_tier=tier)
    drink.quality_tier = tier
    return drink


@transaction.atomic
def delete_drink(*, drink_id: UUID, user: User) -> None:
    """
    Delete a drink, removing its ranking first.

    A ranked drink leaves its tier through the regular ranking removal, so the
    remaining ranks stay contiguous and are rescored in the same transaction.

    Raises:
        DrinkNotFoundError: If drink doesn't exist or belongs to another user
    """
    from apps.rankings.models import DrinkRanking
    from apps.rankings.services import delete_ranking

    drink = get_drink(drink_id=drink_id, user=user)

    if DrinkRanking.objects.filter(drink=drink).exists():
        delete_ranking(user=user, drink_id=drink.id)

    drink.delete()
    logger.info("User %s deleted drink %s", user.id, drink_id)


def get_user_drinks(
    *,
    user: User,
    cafe_id: Optional[UUID] = None,
    sort: str = 'logged_at',
    order: str = 'desc',
) -> QuerySet[Drink]:
    """
    List the user's drinks, optionally for one cafe.

    Raises:
        InvalidDrinkDataError: If sort or order is not supported
    """
    if sort not in SORT_FIELDS:
        raise InvalidDrinkDataError(f"Cannot sort by '{sort}'")
    if order not in ('asc', 'desc'):
        raise InvalidDrinkDataError("Order must be 'asc' or 'desc'")

    queryset = Drink.objects.filter(user=user).select_related('cafe')
    if cafe_id:
        queryset = queryset.filter(cafe_id=cafe_id)

    field = SORT_FIELDS[sort]
    if order == 'desc':
        return queryset.order_by(f'-{field}', '-created_at')
    return queryset.order_by(field, 'created_at')


def get_drink_types(*, user: User) -> list[str]:
    """Distinct drink types the user has logged, alphabetically."""
    return list(
        Drink.objects.filter(user=user)
        .order_by('drink_type')
        .values_list('drink_type', flat=True)
        .distinct()
    )


def get_last_drink(*, user: User) -> Optional[Drink]:
    """Most recently logged drink, or None."""
    return (
        Drink.objects.filter(user=user)
        .select_related('cafe')
        .order_by('-logged_at', '-created_at')
        .first()
    )
