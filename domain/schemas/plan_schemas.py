from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from domain.schemas.base import APIModel
from domain.schemas.recipe_schemas import RecipeResponse


class MealIn(APIModel):
    recipe: str
    type: str


class MealPlanCreate(APIModel):
    week_start_date: date
    meals: Dict[str, List[MealIn]] = {}


class MealPlanUpdate(APIModel):
    """Partial update; only fields present in the body are merged."""

    week_start_date: Optional[date] = None
    meals: Optional[Dict[str, List[MealIn]]] = None


class MealResponse(APIModel):
    recipe_id: str
    type: str
    # None when the referenced recipe has since been deleted
    recipe: Optional[RecipeResponse] = None


class MealPlanResponse(APIModel):
    id: str
    user_id: str
    week_start_date: date
    week_end_date: date
    meals: Dict[str, List[MealResponse]]
    created_at: datetime
    updated_at: datetime


class GroceryItem(APIModel):
    name: str
    quantity: float
    unit: str
