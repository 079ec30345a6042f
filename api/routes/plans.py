from __future__ import annotations

import logging
from typing import List

from bson import ObjectId
from fastapi import APIRouter, Depends, status

from api.dependencies import (
    current_owner_id,
    get_planner_service,
    get_shopping_service,
    parse_object_id,
)
from domain.mappers import MealPlanMapper
from domain.schemas.plan_schemas import (
    GroceryItem,
    MealPlanCreate,
    MealPlanResponse,
    MealPlanUpdate,
)
from services import PlannerService, ShoppingService

router = APIRouter(prefix="/meal-plans", tags=["Meal Planning"])
logger = logging.getLogger("mealplanner.api.plans")


@router.get("", response_model=List[MealPlanResponse])
def list_plans(
    owner_id: ObjectId = Depends(current_owner_id),
    service: PlannerService = Depends(get_planner_service),
):
    """
    List the caller's meal plans, most recent week first.

    Recipes referenced by all plans are loaded in a single query.
    """
    plans = service.list_plans(owner_id)
    recipes = service.resolve_many(owner_id, plans)
    logger.info("Found %d plans for user %s", len(plans), owner_id)
    return [MealPlanMapper.to_response(p, recipes) for p in plans]


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    body: MealPlanCreate,
    owner_id: ObjectId = Depends(current_owner_id),
    service: PlannerService = Depends(get_planner_service),
):
    """
    Create a meal plan for one week.

    - **weekStartDate** must be a Monday
    - **meals** maps `YYYY-MM-DD` dates within that week to `{recipe, type}` entries
    - every recipe must exist and belong to the caller
    - only one plan per week is allowed
    """
    plan = service.create_plan(owner_id, body.model_dump())
    return MealPlanMapper.to_response(plan, service.resolve_recipes(owner_id, plan))


@router.get("/current", response_model=MealPlanResponse)
def get_current_plan(
    owner_id: ObjectId = Depends(current_owner_id),
    service: PlannerService = Depends(get_planner_service),
):
    """The plan for the week containing today."""
    plan = service.get_current_plan(owner_id)
    return MealPlanMapper.to_response(plan, service.resolve_recipes(owner_id, plan))


@router.get("/{plan_id}", response_model=MealPlanResponse)
def get_plan(
    plan_id: str,
    owner_id: ObjectId = Depends(current_owner_id),
    service: PlannerService = Depends(get_planner_service),
):
    plan, recipes = service.get_plan_with_recipes(
        owner_id, parse_object_id(plan_id, "meal plan")
    )
    return MealPlanMapper.to_response(plan, recipes)


@router.put("/{plan_id}", response_model=MealPlanResponse)
def update_plan(
    plan_id: str,
    body: MealPlanUpdate,
    owner_id: ObjectId = Depends(current_owner_id),
    service: PlannerService = Depends(get_planner_service),
):
    plan = service.update_plan(
        owner_id,
        parse_object_id(plan_id, "meal plan"),
        body.model_dump(exclude_unset=True),
    )
    return MealPlanMapper.to_response(plan, service.resolve_recipes(owner_id, plan))


@router.delete("/{plan_id}")
def delete_plan(
    plan_id: str,
    owner_id: ObjectId = Depends(current_owner_id),
    service: PlannerService = Depends(get_planner_service),
):
    service.delete_plan(owner_id, parse_object_id(plan_id, "meal plan"))
    return {"message": "Meal plan deleted successfully"}


@router.get("/{plan_id}/grocery-list", response_model=List[GroceryItem])
def get_grocery_list(
    plan_id: str,
    owner_id: ObjectId = Depends(current_owner_id),
    service: ShoppingService = Depends(get_shopping_service),
):
    """Ingredients of every planned recipe, summed per (name, unit) and sorted by name."""
    return service.grocery_list(owner_id, parse_object_id(plan_id, "meal plan"))
