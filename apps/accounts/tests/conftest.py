import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User

PASSWORD = 'TestPass123!'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def make_user(db):
    """Factory for drinker accounts sharing one test password."""
    def _make_user(email, **extra):
        return User.objects.create_user(email=email, password=PASSWORD, **extra)
    return _make_user


@pytest.fixture
def user(make_user):
    return make_user('testuser@example.com', display_name='Test Drinker')


@pytest.fixture
def user_inactive(make_user):
    return make_user('inactive@example.com', is_active=False)


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as `user` via JWT."""
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(user).access_token}')
    return api_client
