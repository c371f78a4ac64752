import pytest
from datetime import timedelta
from decimal import Decimal
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
def drink_user(db):
    """Create and return a test user for drinks."""
    return User.objects.create_user(
        email='drinker@example.com',
        password='TestPass123!',
        display_name='Coffee Drinker',
    )


@pytest.fixture
def drink_other_user(db):
    """Create and return another test user for drinks."""
    return User.objects.create_user(
        email='drinker_other@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def drink_auth_client(api_client, drink_user):
    """Return API client authenticated as drink user."""
    refresh = RefreshToken.for_user(drink_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def drink_cafe(db):
    """Create and return a test cafe."""
    return Cafe.objects.create(name='Industra Coffee', city='Brno')


@pytest.fixture
def drink_other_cafe(db):
    """Create and return another test cafe."""
    return Cafe.objects.create(name='Cafe Podnebi', city='Brno')


@pytest.fixture
def drink(drink_user, drink_cafe):
    """Create and return a logged drink."""
    return Drink.objects.create(
        user=drink_user,
        cafe=drink_cafe,
        drink_type='Cappuccino',
        rating=Decimal('4.5'),
        price=Decimal('65.00'),
        logged_at=timezone.now() - timedelta(days=2),
    )


@pytest.fixture
def another_drink(drink_user, drink_other_cafe):
    """Create and return a more recent drink at another cafe."""
    return Drink.objects.create(
        user=drink_user,
        cafe=drink_other_cafe,
        drink_type='Americano',
        rating=Decimal('3.0'),
        price=Decimal('55.00'),
        logged_at=timezone.now() - timedelta(days=1),
    )
