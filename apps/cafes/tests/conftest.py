import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cafes.models import Cafe


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def cafe_user(db):
    """Create and return a test user for cafes."""
    return User.objects.create_user(
        email='visitor@example.com',
        password='TestPass123!',
        display_name='Cafe Visitor',
    )


@pytest.fixture
def cafe_other_user(db):
    """Create and return another test user for cafes."""
    return User.objects.create_user(
        email='visitor_other@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def cafe_auth_client(api_client, cafe_user):
    """Return API client authenticated as cafe user."""
    refresh = RefreshToken.for_user(cafe_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def cafe(db):
    """Create and return a test cafe."""
    return Cafe.objects.create(
        name='Rustica',
        address='Main Square 1',
        city='Prague',
        place_id='place-rustica',
    )


@pytest.fixture
def another_cafe(db):
    """Create and return another test cafe."""
    return Cafe.objects.create(
        name='Kafe Lidl',
        city='Brno',
    )
