"""
Domain mappers package.
Handles transformation between document models and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.recipe_mapper import RecipeMapper
from domain.mappers.plan_mapper import MealPlanMapper

__all__ = ["UserMapper", "RecipeMapper", "MealPlanMapper"]
