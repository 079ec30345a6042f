"""Recipe service: owner-scoped recipe CRUD and serving scaling"""

from typing import Any, Dict, List, Mapping
import logging

from bson import ObjectId
from pymongo.database import Database

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Recipe
from domain.models.base import utcnow
from domain.validation import clean_recipe, validate_recipe
from repositories import RecipeRepository

logger = logging.getLogger("mealplanner.recipe")

RECIPE_FIELDS = (
    "name",
    "description",
    "ingredients",
    "instructions",
    "prep_time",
    "cook_time",
    "servings",
    "category",
    "image_url",
)


def _checked(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize and validate a recipe document; raise on any field error."""
    cleaned = clean_recipe(doc)
    errors = validate_recipe(cleaned)
    if errors:
        raise ServiceValidationError(errors=[e.to_dict() for e in errors])
    return cleaned


class RecipeService:
    """Business logic for recipes. Every call is scoped to ``owner_id``."""

    def __init__(self, db: Database):
        self.recipes = RecipeRepository(db)

    def list_recipes(self, owner_id: ObjectId) -> List[Recipe]:
        return self.recipes.list_owned(owner_id)

    def get_recipe(self, owner_id: ObjectId, recipe_id: ObjectId) -> Recipe:
        recipe = self.recipes.get_owned(recipe_id, owner_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    def create_recipe(self, owner_id: ObjectId, data: Mapping[str, Any]) -> Recipe:
        doc = _checked({k: data.get(k) for k in RECIPE_FIELDS})
        now = utcnow()
        doc.update(created_by=owner_id, created_at=now, updated_at=now)
        recipe = self.recipes.insert(doc)
        logger.info("recipe_created recipe_id=%s owner=%s", recipe.id, owner_id)
        return recipe

    def update_recipe(
        self, owner_id: ObjectId, recipe_id: ObjectId, changes: Mapping[str, Any]
    ) -> Recipe:
        """Merge a partial update into the stored recipe and re-validate the result."""
        stored = self.recipes.get_owned_document(recipe_id, owner_id)
        if not stored:
            raise NotFoundError("Recipe not found")

        merged = dict(stored)
        merged.update({k: v for k, v in changes.items() if k in RECIPE_FIELDS})
        doc = _checked(merged)
        doc["updated_at"] = utcnow()

        recipe = self.recipes.replace_owned(recipe_id, owner_id, doc)
        if not recipe:
            # deleted between read and write
            raise NotFoundError("Recipe not found")
        logger.info(
            "recipe_updated recipe_id=%s fields=%s", recipe_id, sorted(changes.keys())
        )
        return recipe

    def delete_recipe(self, owner_id: ObjectId, recipe_id: ObjectId) -> None:
        # Meal plans that reference this recipe keep the dangling id; grocery
        # lists skip it.
        if not self.recipes.delete_owned(recipe_id, owner_id):
            raise NotFoundError("Recipe not found")
        logger.info("recipe_deleted recipe_id=%s owner=%s", recipe_id, owner_id)
