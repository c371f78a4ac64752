"""Domain exceptions for cafes app."""


class CafesServiceError(Exception):
    """Base exception for all cafes service errors."""
    pass


class CafeNotFoundError(CafesServiceError):
    """Cafe does not exist."""
    pass


class InvalidCafeDataError(CafesServiceError):
    """Cafe payload is missing required fields."""
    pass
