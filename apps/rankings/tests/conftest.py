import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cafes.models import Cafe
from apps.drinks.models import Drink


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def ranking_user(db):
    """Create and return a test user for rankings."""
    return User.objects.create_user(
        email='ranker@example.com',
        password='TestPass123!',
        display_name='Drink Ranker',
    )


@pytest.fixture
def ranking_other_user(db):
    """Create and return another test user for rankings."""
    return User.objects.create_user(
        email='ranker_other@example.com',
        password='TestPass123!',
        display_name='Other Ranker',
    )


@pytest.fixture
def ranking_auth_client(api_client, ranking_user):
    """Return API client authenticated as ranking user."""
    refresh = RefreshToken.for_user(ranking_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def ranking_other_client(ranking_other_user):
    """Return a separate API client authenticated as the other user."""
    client = APIClient()
    refresh = RefreshToken.for_user(ranking_other_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def ranking_cafe(db):
    """Create and return a test cafe."""
    return Cafe.objects.create(
        name='Blue Door Coffee',
        address='12 Harbour St',
        city='Brno',
        photo_reference='photo-ref-1',
    )


@pytest.fixture
def make_drink(ranking_user, ranking_cafe):
    """
    Factory for logged drinks.

    Each call logs a drink one minute later than the previous one, so
    "newest first" ordering is deterministic.
    """
    created = []

    def _make_drink(drink_type=None, user=None, quality_tier=None):
        logged_at = timezone.now() - timedelta(hours=1) + timedelta(minutes=len(created))
        drink = Drink.objects.create(
            user=user or ranking_user,
            cafe=ranking_cafe,
            drink_type=drink_type or f'Flat white {len(created) + 1}',
            quality_tier=quality_tier,
            logged_at=logged_at,
        )
        created.append(drink)
        return drink

    return _make_drink


@pytest.fixture
def drinks(make_drink):
    """Five unranked drinks for the ranking user."""
    return [make_drink() for _ in range(5)]
