"""
Meal plan document model.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field

from domain.enums import MealType
from domain.models.base import as_date, oid_str, utcnow


class Meal(BaseModel):
    """One recipe assigned to a meal slot."""

    recipe_id: str
    type: MealType


class MealPlan(BaseModel):
    """Week-anchored plan as stored in the ``meal_plans`` collection.

    ``meals`` maps ISO dates (``YYYY-MM-DD``) inside the week to the meals
    planned for that day.
    """

    id: Optional[str] = None
    user_id: str
    week_start_date: date
    meals: Dict[str, List[Meal]] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "MealPlan":
        meals = {
            day: [
                {"recipe_id": oid_str(m.get("recipe")), "type": m.get("type")}
                for m in entries
            ]
            for day, entries in (doc.get("meals") or {}).items()
        }
        return cls.model_validate(
            {
                "id": oid_str(doc.get("_id")),
                "user_id": oid_str(doc.get("user_id")),
                "week_start_date": as_date(doc.get("week_start_date")),
                "meals": meals,
                "created_at": doc.get("created_at") or utcnow(),
                "updated_at": doc.get("updated_at") or utcnow(),
            }
        )

    @property
    def week_end_date(self) -> date:
        return self.week_start_date + timedelta(days=6)

    def recipe_ids(self) -> Set[str]:
        """Distinct recipe ids referenced anywhere in the plan."""
        return {meal.recipe_id for entries in self.meals.values() for meal in entries}
