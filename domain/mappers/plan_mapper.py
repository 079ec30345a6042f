"""
Meal plan domain mappers.
Joins a plan with its batch-loaded recipes into the response DTO.
"""

from typing import Mapping

from domain.mappers.recipe_mapper import RecipeMapper
from domain.models import MealPlan, Recipe
from domain.schemas.plan_schemas import MealPlanResponse, MealResponse


class MealPlanMapper:
    """Mapper for meal plan transformations."""

    @staticmethod
    def to_response(plan: MealPlan, recipes: Mapping[str, Recipe]) -> MealPlanResponse:
        """
        Convert a MealPlan to MealPlanResponse DTO.

        Args:
            plan: MealPlan document model
            recipes: recipe id -> Recipe for every recipe that could be resolved

        Returns:
            MealPlanResponse with each meal's recipe embedded (None if dangling)
        """
        meals = {}
        for day in sorted(plan.meals):
            meals[day] = [
                MealResponse(
                    recipe_id=meal.recipe_id,
                    type=meal.type.value,
                    recipe=(
                        RecipeMapper.to_response(recipes[meal.recipe_id])
                        if meal.recipe_id in recipes
                        else None
                    ),
                )
                for meal in plan.meals[day]
            ]

        return MealPlanResponse(
            id=plan.id,
            user_id=plan.user_id,
            week_start_date=plan.week_start_date,
            week_end_date=plan.week_end_date,
            meals=meals,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )
