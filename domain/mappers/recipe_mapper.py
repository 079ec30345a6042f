"""
Recipe domain mappers.
"""

from domain.models import Recipe
from domain.schemas.recipe_schemas import (
    IngredientResponse,
    RecipeResponse,
    ScaledRecipeResponse,
)


class RecipeMapper:
    """Mapper for recipe transformations."""

    @staticmethod
    def to_response(recipe: Recipe) -> RecipeResponse:
        return RecipeResponse(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            ingredients=[
                IngredientResponse(name=i.name, quantity=i.quantity, unit=i.unit)
                for i in recipe.ingredients
            ],
            instructions=list(recipe.instructions),
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            total_time=recipe.total_time(),
            servings=recipe.servings,
            category=recipe.category.value,
            image_url=recipe.image_url,
            created_by=recipe.created_by,
            created_at=recipe.created_at,
            updated_at=recipe.updated_at,
        )

    @staticmethod
    def to_scaled_response(recipe: Recipe, servings: int) -> ScaledRecipeResponse:
        """Project the recipe onto a different serving count."""
        return ScaledRecipeResponse(
            recipe_id=recipe.id,
            name=recipe.name,
            original_servings=recipe.servings,
            servings=servings,
            total_time=recipe.total_time(),
            ingredients=[
                IngredientResponse(name=i.name, quantity=i.quantity, unit=i.unit)
                for i in recipe.scale_servings(servings)
            ],
        )
