"""
Domain schemas package - Pydantic models for request/response bodies.
"""

from domain.schemas.auth_schemas import (
    SignupRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
)
from domain.schemas.recipe_schemas import (
    IngredientIn,
    RecipeCreate,
    RecipeUpdate,
    IngredientResponse,
    RecipeResponse,
    ScaledRecipeResponse,
)
from domain.schemas.plan_schemas import (
    MealIn,
    MealPlanCreate,
    MealPlanUpdate,
    MealResponse,
    MealPlanResponse,
    GroceryItem,
)

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "IngredientIn",
    "RecipeCreate",
    "RecipeUpdate",
    "IngredientResponse",
    "RecipeResponse",
    "ScaledRecipeResponse",
    "MealIn",
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealResponse",
    "MealPlanResponse",
    "GroceryItem",
]
