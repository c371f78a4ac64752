"""
Domain exceptions for accounts services.

Like the rankings errors, each carries a `code` for the error response.
"""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    code = 'accounts_error'


class UserRegistrationError(AccountsServiceError):
    """Email already taken or the account could not be created."""
    code = 'registration_failed'


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password."""
    code = 'invalid_credentials'


class InactiveAccountError(AccountsServiceError):
    """Account exists but is deactivated."""
    code = 'account_inactive'


class InvalidProfileDataError(AccountsServiceError):
    """Profile update rejected."""
    code = 'validation_error'
