"""
App package - Application configuration and core utilities.
Contains settings and the exception taxonomy.
"""

from app.config import Settings, get_settings
from app.exceptions import (
    MealPlannerError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
)

__all__ = [
    "Settings",
    "get_settings",
    "MealPlannerError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
]
