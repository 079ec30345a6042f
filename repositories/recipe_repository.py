"""
Recipe Repository - Owner-scoped data access for the recipes collection
"""

from pymongo import DESCENDING

from adapters.mongo_adapter import RECIPES
from domain.models import Recipe
from repositories.base import OwnedRepository


class RecipeRepository(OwnedRepository[Recipe]):
    """
    Repository for recipe data access.
    Recipes are owned through ``created_by``; listings are newest first.
    """

    collection_name = RECIPES
    model = Recipe
    owner_field = "created_by"
    default_sort = [("created_at", DESCENDING)]
