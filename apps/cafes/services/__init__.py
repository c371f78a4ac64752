"""
Cafes services - Business logic layer.

Cafes form a shared catalogue; drinks reference them.
"""

from .cafe_management import (
    create_cafe,
    get_cafe,
    list_cafes,
)

from .exceptions import (
    CafesServiceError,
    CafeNotFoundError,
    InvalidCafeDataError,
)

__all__ = [
    'create_cafe',
    'get_cafe',
    'list_cafes',
    'CafesServiceError',
    'CafeNotFoundError',
    'InvalidCafeDataError',
]
