"""
Drinks services - Business logic layer.

Drink log operations plus the drink store contract used by rankings
(get_drink, set_drink_tier, delete_drink).
"""

from .drink_management import (
    create_drink,
    get_drink,
    set_drink_tier,
    delete_drink,
    get_user_drinks,
    get_drink_types,
    get_last_drink,
)

from .exceptions import (
    DrinksServiceError,
    DrinkNotFoundError,
    CafeNotFoundError,
    InvalidDrinkDataError,
)

__all__ = [
    # Drink Management Services
    'create_drink',
    'get_drink',
    'set_drink_tier',
    'delete_drink',
    'get_user_drinks',
    'get_drink_types',
    'get_last_drink',
    # Exceptions
    'DrinksServiceError',
    'DrinkNotFoundError',
    'CafeNotFoundError',
    'InvalidDrinkDataError',
]
