"""Domain exceptions for drinks app."""


class DrinksServiceError(Exception):
    """Base exception for all drinks service errors."""
    pass


class DrinkNotFoundError(DrinksServiceError):
    """Drink does not exist or belongs to another user."""
    pass


class CafeNotFoundError(DrinksServiceError):
    """Referenced cafe does not exist."""
    pass


class InvalidDrinkDataError(DrinksServiceError):
    """Drink payload failed validation (rating, price, tier, sort...)."""
    pass
