"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.recipe_service import RecipeService
from services.planner_service import PlannerService
from services.shopping_service import ShoppingService, build_grocery_list

__all__ = [
    "AuthService",
    "RecipeService",
    "PlannerService",
    "ShoppingService",
    "build_grocery_list",
]
