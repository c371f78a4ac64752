"""Accounts services - registration, login and profile."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidProfileDataError,
)
from .user_accounts import register_user, authenticate_user, update_profile

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidProfileDataError',
    # Services
    'register_user',
    'authenticate_user',
    'update_profile',
]
