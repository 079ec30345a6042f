"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, OwnedRepository
from repositories.user_repository import UserRepository
from repositories.recipe_repository import RecipeRepository
from repositories.meal_plan_repository import MealPlanRepository

__all__ = [
    "BaseRepository",
    "OwnedRepository",
    "UserRepository",
    "RecipeRepository",
    "MealPlanRepository",
]
