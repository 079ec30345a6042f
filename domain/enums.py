"""
Domain enums for the meal planner.
Contains all enumeration types used across the domain models.
"""

import enum


class RecipeCategory(str, enum.Enum):
    """Recipe categories"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DESSERT = "dessert"


class MealType(str, enum.Enum):
    """Meal slots within a planned day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


RECIPE_CATEGORIES = [c.value for c in RecipeCategory]
MEAL_TYPES = [m.value for m in MealType]
