from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple

from bson import ObjectId
from pymongo.database import Database

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import MealPlan, Recipe
from domain.models.base import as_date, date_to_datetime, utcnow
from domain.validation import validate_meal_plan
from repositories import MealPlanRepository, RecipeRepository


logger = logging.getLogger("mealplanner.planner")


def _meals_for_storage(meals: Mapping[str, List[Mapping[str, Any]]]) -> Dict[str, List[Dict[str, Any]]]:
    return {
        day: [
            {"recipe": ObjectId(str(m["recipe"])), "type": str(m["type"])}
            for m in entries
        ]
        for day, entries in meals.items()
    }


class PlannerService:
    """
    Meal plans:
    - validates week anchoring and meal dates before every write
    - checks that every referenced recipe exists and belongs to the caller
    - resolves recipe references with one batch query per plan (no implicit populate)
    All calls are scoped to ``owner_id``.
    """

    def __init__(self, db: Database):
        self.plans = MealPlanRepository(db)
        self.recipes = RecipeRepository(db)

    # ---------- validation ----------

    def _validate(self, data: Mapping[str, Any]) -> None:
        errors = validate_meal_plan(data)
        if errors:
            raise ServiceValidationError(errors=[e.to_dict() for e in errors])

    def _check_recipes_owned(
        self, owner_id: ObjectId, meals: Mapping[str, List[Mapping[str, Any]]]
    ) -> None:
        """All distinct recipe ids must resolve to the caller's recipes."""
        recipe_ids = {
            ObjectId(str(m["recipe"])) for entries in meals.values() for m in entries
        }
        if not recipe_ids:
            return
        found = self.recipes.count_owned_by_ids(list(recipe_ids), owner_id)
        if found != len(recipe_ids):
            logger.warning(
                "plan_recipes_invalid owner=%s requested=%d found=%d",
                owner_id,
                len(recipe_ids),
                found,
            )
            raise ServiceValidationError("One or more recipes are invalid")

    # ---------- reference resolution ----------

    def resolve_recipes(self, owner_id: ObjectId, plan: MealPlan) -> Dict[str, Recipe]:
        """Batch-load the recipes referenced by ``plan``; missing ones are simply absent."""
        ids = [ObjectId(rid) for rid in plan.recipe_ids() if ObjectId.is_valid(rid)]
        return {r.id: r for r in self.recipes.list_owned_by_ids(ids, owner_id)}

    def resolve_many(
        self, owner_id: ObjectId, plans: List[MealPlan]
    ) -> Dict[str, Recipe]:
        ids = {rid for plan in plans for rid in plan.recipe_ids()}
        oids = [ObjectId(rid) for rid in ids if ObjectId.is_valid(rid)]
        return {r.id: r for r in self.recipes.list_owned_by_ids(oids, owner_id)}

    # ---------- queries ----------

    def list_plans(self, owner_id: ObjectId) -> List[MealPlan]:
        """Newest week first."""
        return self.plans.list_owned(owner_id)

    def get_plan(self, owner_id: ObjectId, plan_id: ObjectId) -> MealPlan:
        plan = self.plans.get_owned(plan_id, owner_id)
        if not plan:
            raise NotFoundError("Meal plan not found")
        return plan

    def get_plan_with_recipes(
        self, owner_id: ObjectId, plan_id: ObjectId
    ) -> Tuple[MealPlan, Dict[str, Recipe]]:
        plan = self.get_plan(owner_id, plan_id)
        return plan, self.resolve_recipes(owner_id, plan)

    def get_current_plan(
        self, owner_id: ObjectId, today: Optional[date] = None
    ) -> MealPlan:
        """The plan whose week contains ``today``."""
        today = today or date.today()
        monday = today - timedelta(days=today.weekday())
        plan = self.plans.get_for_week(owner_id, monday)
        if not plan:
            raise NotFoundError("No meal plan for the current week")
        return plan

    # ---------- writes ----------

    def create_plan(self, owner_id: ObjectId, data: Mapping[str, Any]) -> MealPlan:
        week_start = data.get("week_start_date")
        meals = data.get("meals") or {}
        self._validate({"week_start_date": week_start, "meals": meals})
        self._check_recipes_owned(owner_id, meals)

        now = utcnow()
        plan = self.plans.insert(
            {
                "user_id": owner_id,
                "week_start_date": date_to_datetime(week_start),
                "meals": _meals_for_storage(meals),
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info(
            "plan_created plan_id=%s owner=%s week=%s days=%d",
            plan.id,
            owner_id,
            week_start,
            len(meals),
        )
        return plan

    def update_plan(
        self, owner_id: ObjectId, plan_id: ObjectId, changes: Mapping[str, Any]
    ) -> MealPlan:
        """Merge ``weekStartDate`` and/or ``meals`` into the stored plan and re-validate."""
        stored = self.plans.get_owned_document(plan_id, owner_id)
        if not stored:
            raise NotFoundError("Meal plan not found")

        week_start = changes.get("week_start_date") or as_date(stored.get("week_start_date"))
        meals_changed = changes.get("meals") is not None
        meals = changes["meals"] if meals_changed else (stored.get("meals") or {})

        self._validate({"week_start_date": week_start, "meals": meals})
        if meals_changed:
            self._check_recipes_owned(owner_id, meals)

        doc = dict(stored)
        doc.update(
            week_start_date=date_to_datetime(week_start),
            meals=_meals_for_storage(meals),
            updated_at=utcnow(),
        )
        plan = self.plans.replace_owned(plan_id, owner_id, doc)
        if not plan:
            raise NotFoundError("Meal plan not found")
        logger.info("plan_updated plan_id=%s owner=%s", plan_id, owner_id)
        return plan

    def delete_plan(self, owner_id: ObjectId, plan_id: ObjectId) -> None:
        if not self.plans.delete_owned(plan_id, owner_id):
            raise NotFoundError("Meal plan not found")
        logger.info("plan_deleted plan_id=%s owner=%s", plan_id, owner_id)
