"""Grocery list service"""

import logging
from typing import Dict, List, Mapping, Tuple

from bson import ObjectId
from pymongo.database import Database

from domain.models import MealPlan, Recipe
from domain.schemas.plan_schemas import GroceryItem
from services.planner_service import PlannerService

logger = logging.getLogger("mealplanner.shopping")


def build_grocery_list(
    plan: MealPlan, recipes: Mapping[str, Recipe]
) -> List[GroceryItem]:
    """
    Sum ingredient quantities across every meal of ``plan``.

    Ingredients are grouped by (lowercased name, unit); the same name in two
    units stays on two lines since nothing is converted. Meals whose recipe is
    not in ``recipes`` are skipped. The result is ordered by name, then unit.

    Args:
        plan: meal plan whose meals reference recipes by id
        recipes: recipe id -> Recipe for the references that could be resolved

    Returns:
        List of GroceryItem, one per (name, unit)
    """
    totals: Dict[Tuple[str, str], float] = {}

    for entries in plan.meals.values():
        for meal in entries:
            recipe = recipes.get(meal.recipe_id)
            if recipe is None:
                continue
            for ingredient in recipe.ingredients:
                key = (ingredient.name.lower(), ingredient.unit)
                if key in totals:
                    totals[key] += ingredient.quantity
                else:
                    totals[key] = ingredient.quantity

    items = [
        GroceryItem(name=name, quantity=quantity, unit=unit)
        for (name, unit), quantity in totals.items()
    ]
    return sorted(items, key=lambda item: (item.name.casefold(), item.name, item.unit))


class ShoppingService:
    """Business logic for grocery list generation."""

    def __init__(self, db: Database):
        self.planner = PlannerService(db)

    def grocery_list(self, owner_id: ObjectId, plan_id: ObjectId) -> List[GroceryItem]:
        """
        Load the plan, batch-load its recipes, then aggregate.

        Raises:
            NotFoundError: if the plan does not exist or is not owned by the caller
        """
        plan, recipes = self.planner.get_plan_with_recipes(owner_id, plan_id)
        items = build_grocery_list(plan, recipes)

        missing = plan.recipe_ids() - set(recipes)
        if missing:
            logger.info(
                "grocery_list plan_id=%s skipped %d unresolved recipe(s)",
                plan_id,
                len(missing),
            )
        logger.info("grocery_list plan_id=%s items=%d", plan_id, len(items))
        return items
