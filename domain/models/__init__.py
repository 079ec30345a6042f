"""
Domain models package - MongoDB document models.
"""

from domain.models.user import User
from domain.models.recipe import Ingredient, Recipe
from domain.models.meal_plan import Meal, MealPlan

__all__ = [
    "User",
    "Ingredient",
    "Recipe",
    "Meal",
    "MealPlan",
]
