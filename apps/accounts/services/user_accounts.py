"""
Drinker account services.

Emails are stored lowercased and looked up case-insensitively, so the
same person cannot end up with two sets of rankings.
"""

import logging

from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from .exceptions import (
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidProfileDataError,
)

logger = logging.getLogger(__name__)

DISPLAY_NAME_MAX_LENGTH = 100


def _clean_email(email: str) -> str:
    return (email or '').strip().lower()


@transaction.atomic
def register_user(*, email: str, password: str, display_name: str = '') -> User:
    """
    Create a drinker account.

    Raises:
        UserRegistrationError: If the email is already registered
    """
    email = _clean_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("An account with this email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=(display_name or '').strip(),
            )
    except IntegrityError:
        raise UserRegistrationError("An account with this email already exists")

    logger.info("Registered user %s", user.id)
    return user


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check credentials and stamp last_login.

    Raises:
        InvalidCredentialsError: If email is unknown or password is wrong
        InactiveAccountError: If account is deactivated
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=_clean_email(email))
        .first()
    )
    if user is None or not user.check_password(password):
        logger.warning("Failed login for %s", _clean_email(email))
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user


def update_profile(*, user: User, display_name: str) -> User:
    """
    Raises:
        InvalidProfileDataError: If display_name is too long
    """
    display_name = (display_name or '').strip()
    if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        raise InvalidProfileDataError(
            f"Display name can be at most {DISPLAY_NAME_MAX_LENGTH} characters"
        )

    user.display_name = display_name
    user.save(update_fields=['display_name'])
    return user
