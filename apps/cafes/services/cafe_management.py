"""Cafe catalogue service - create, fetch and list cafes."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Count, Max, Q, QuerySet

from apps.accounts.models import User
from apps.cafes.models import Cafe
from .exceptions import CafeNotFoundError, InvalidCafeDataError

logger = logging.getLogger(__name__)


@transaction.atomic
def create_cafe(
    *,
    name: str,
    address: str = '',
    city: str = '',
    place_id: Optional[str] = None,
    photo_reference: str = '',
    lat: Optional[Decimal] = None,
    lng: Optional[Decimal] = None,
) -> tuple[Cafe, bool]:
    """
    Create a cafe, reusing an existing one picked from the same map place.

    Returns:
        Tuple of (cafe, created)

    Raises:
        InvalidCafeDataError: If name is blank
    """
    name = (name or '').strip()
    if not name:
        raise InvalidCafeDataError("Cafe name is required")

    place_id = place_id or None
    if place_id:
        existing = Cafe.objects.filter(place_id=place_id).first()
        if existing:
            return existing, False

    try:
        with transaction.atomic():
            cafe = Cafe.objects.create(
                name=name,
                address=address or '',
                city=city or '',
                place_id=place_id,
                photo_reference=photo_reference or '',
                lat=lat,
                lng=lng,
            )
    except IntegrityError:
        # Same place created concurrently
        return Cafe.objects.get(place_id=place_id), False

    logger.info("Created cafe %s (%s)", cafe.id, cafe.name)
    return cafe, True


def get_cafe(*, cafe_id: UUID) -> Cafe:
    """
    Raises:
        CafeNotFoundError: If cafe doesn't exist
    """
    try:
        return Cafe.objects.get(id=cafe_id)
    except Cafe.DoesNotExist:
        raise CafeNotFoundError("Cafe not found")


def list_cafes(*, user: User, search: str = '') -> QuerySet[Cafe]:
    """
    List cafes annotated with the user's visit data.

    Each cafe carries `drink_count` (drinks this user logged there) and
    `last_visit` (their most recent logged_at, or None).
    """
    own_drinks = Q(drinks__user=user)
    queryset = Cafe.objects.annotate(
        drink_count=Count('drinks', filter=own_drinks),
        last_visit=Max('drinks__logged_at', filter=own_drinks),
    )

    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(city__icontains=search))

    return queryset.order_by('name')
