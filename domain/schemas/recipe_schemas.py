"""Request/response schemas for recipes.

Request bodies only check JSON shape; the business rules live in
``domain.validation.validate_recipe``.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from domain.schemas.base import APIModel


class IngredientIn(APIModel):
    name: str
    quantity: float = Field(..., allow_inf_nan=False)
    unit: str


class RecipeCreate(APIModel):
    name: str
    description: str
    ingredients: List[IngredientIn]
    instructions: List[str]
    prep_time: int
    cook_time: int
    servings: int
    category: str
    image_url: Optional[str] = None


class RecipeUpdate(APIModel):
    """Partial update; only fields present in the body are merged."""

    name: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[IngredientIn]] = None
    instructions: Optional[List[str]] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    category: Optional[str] = None
    image_url: Optional[str] = None


class IngredientResponse(APIModel):
    name: str
    quantity: float
    unit: str


class RecipeResponse(APIModel):
    id: str
    name: str
    description: str
    ingredients: List[IngredientResponse]
    instructions: List[str]
    prep_time: int
    cook_time: int
    total_time: int
    servings: int
    category: str
    image_url: Optional[str] = None
    created_by: str
    created_at: datetime
    updated_at: datetime


class ScaledRecipeResponse(APIModel):
    recipe_id: str
    name: str
    original_servings: int
    servings: int = Field(..., ge=1)
    total_time: int
    ingredients: List[IngredientResponse]
