"""
Meal Plan Repository - Owner-scoped data access for the meal_plans collection
"""

from datetime import date
from typing import Optional

from bson import ObjectId
from pymongo import DESCENDING

from adapters.mongo_adapter import MEAL_PLANS
from domain.models import MealPlan
from domain.models.base import date_to_datetime
from repositories.base import OwnedRepository


class MealPlanRepository(OwnedRepository[MealPlan]):
    """
    Repository for meal plans.
    A unique index on (user_id, week_start_date) allows one plan per week.
    """

    collection_name = MEAL_PLANS
    model = MealPlan
    owner_field = "user_id"
    default_sort = [("week_start_date", DESCENDING)]
    duplicate_message = "A meal plan already exists for this week"

    def get_for_week(self, owner_id: ObjectId, week_start: date) -> Optional[MealPlan]:
        return self._to_model(
            self.collection.find_one(
                self._scope(owner_id, week_start_date=date_to_datetime(week_start))
            )
        )
