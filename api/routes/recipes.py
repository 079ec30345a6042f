"""
Recipe routes - CRUD over the caller's recipes plus serving scaling.
"""

from typing import List
import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, Query, status

from api.dependencies import current_owner_id, get_recipe_service, parse_object_id
from domain.mappers import RecipeMapper
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeResponse,
    RecipeUpdate,
    ScaledRecipeResponse,
)
from services import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("mealplanner.api.recipes")


@router.get("", response_model=List[RecipeResponse])
def list_recipes(
    owner_id: ObjectId = Depends(current_owner_id),
    service: RecipeService = Depends(get_recipe_service),
):
    """All recipes created by the caller, newest first."""
    return [RecipeMapper.to_response(r) for r in service.list_recipes(owner_id)]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    body: RecipeCreate,
    owner_id: ObjectId = Depends(current_owner_id),
    service: RecipeService = Depends(get_recipe_service),
):
    recipe = service.create_recipe(owner_id, body.model_dump())
    return RecipeMapper.to_response(recipe)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: str,
    owner_id: ObjectId = Depends(current_owner_id),
    service: RecipeService = Depends(get_recipe_service),
):
    recipe = service.get_recipe(owner_id, parse_object_id(recipe_id, "recipe"))
    return RecipeMapper.to_response(recipe)


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: str,
    body: RecipeUpdate,
    owner_id: ObjectId = Depends(current_owner_id),
    service: RecipeService = Depends(get_recipe_service),
):
    """
    Partially update a recipe.

    Only the fields present in the body are changed; the merged recipe must
    still pass validation.
    """
    recipe = service.update_recipe(
        owner_id,
        parse_object_id(recipe_id, "recipe"),
        body.model_dump(exclude_unset=True),
    )
    return RecipeMapper.to_response(recipe)


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: str,
    owner_id: ObjectId = Depends(current_owner_id),
    service: RecipeService = Depends(get_recipe_service),
):
    service.delete_recipe(owner_id, parse_object_id(recipe_id, "recipe"))
    return {"message": "Recipe deleted successfully"}


@router.get("/{recipe_id}/scaled", response_model=ScaledRecipeResponse)
def scale_recipe(
    recipe_id: str,
    servings: int = Query(..., ge=1, le=1000, description="Target number of servings"),
    owner_id: ObjectId = Depends(current_owner_id),
    service: RecipeService = Depends(get_recipe_service),
):
    """Ingredient quantities for ``servings`` portions; the stored recipe is unchanged."""
    recipe = service.get_recipe(owner_id, parse_object_id(recipe_id, "recipe"))
    return RecipeMapper.to_scaled_response(recipe, servings)
