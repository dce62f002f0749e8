"""Domain exceptions raised by the grocery list, meal plan and recipe services."""

from typing import Optional


class GroceryError(Exception):
    """Base class for grocery domain errors."""
    pass


class GroceryNotFoundError(GroceryError):
    """
    Raised when a grocery list, custom item, meal plan or recipe does not exist
    (or does not belong to the requesting user).
    """
    pass


class GroceryValidationError(GroceryError):
    """
    Raised when input is semantically invalid (blank names, empty id lists,
    day outside 0-6, unknown meal slot).

    Attributes:
        field: Name of the offending field, if known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
