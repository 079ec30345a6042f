"""
Recipe document model.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.enums import RecipeCategory
from domain.models.base import oid_str, utcnow


class Ingredient(BaseModel):
    """Embedded ingredient line of a recipe."""

    name: str
    quantity: float
    unit: str


class Recipe(BaseModel):
    """Recipe as stored in the ``recipes`` collection."""

    id: Optional[str] = None
    name: str
    description: str
    ingredients: List[Ingredient]
    instructions: List[str]
    prep_time: int
    cook_time: int
    servings: int
    category: RecipeCategory
    image_url: Optional[str] = None
    created_by: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Recipe":
        data = dict(doc)
        data["id"] = oid_str(data.pop("_id", None))
        data["created_by"] = oid_str(data.get("created_by"))
        return cls.model_validate(data)

    def total_time(self) -> int:
        """Preparation plus cooking time, in minutes."""
        return self.prep_time + self.cook_time

    def scale_servings(self, new_servings: int) -> List[Ingredient]:
        """Return the ingredient list scaled to ``new_servings``.

        Quantities are rounded to two decimals; the recipe itself is left untouched.
        """
        if new_servings <= 0:
            raise ValueError("servings must be positive")
        factor = new_servings / self.servings
        return [
            Ingredient(
                name=ing.name,
                quantity=round(ing.quantity * factor, 2),
                unit=ing.unit,
            )
            for ing in self.ingredients
        ]
