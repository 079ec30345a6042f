"""
Entity validators.

Each validator is a pure function over a snake_case document dict and returns
a list of ``FieldError``; an empty list means the document may be persisted.
Field names in the errors use the public (camelCase) API names.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Mapping

from bson import ObjectId

from domain.enums import MEAL_TYPES, RECIPE_CATEGORIES

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
IMAGE_URL_RE = re.compile(r"^https?://.+")

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 1000
MAX_MINUTES = 1440
MIN_SERVINGS = 1
MAX_SERVINGS = 100
MAX_QUANTITY = 100_000


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


# ---------- recipes ----------


def clean_recipe(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Trim text fields and lowercase unit/category, leaving bad types for the validator."""
    out = dict(data)
    for key in ("name", "description", "image_url"):
        if isinstance(out.get(key), str):
            out[key] = out[key].strip()
    if out.get("image_url") == "":
        out["image_url"] = None
    if isinstance(out.get("category"), str):
        out["category"] = out["category"].strip().lower()
    if isinstance(out.get("instructions"), list):
        out["instructions"] = [
            s.strip() if isinstance(s, str) else s for s in out["instructions"]
        ]
    if isinstance(out.get("ingredients"), list):
        ingredients = []
        for ing in out["ingredients"]:
            if isinstance(ing, Mapping):
                ing = dict(ing)
                if isinstance(ing.get("name"), str):
                    ing["name"] = ing["name"].strip()
                if isinstance(ing.get("unit"), str):
                    ing["unit"] = ing["unit"].strip().lower()
            ingredients.append(ing)
        out["ingredients"] = ingredients
    for key in ("prep_time", "cook_time", "servings"):
        if isinstance(out.get(key), float) and out[key].is_integer():
            out[key] = int(out[key])
    return out


def _check_minutes(errors: List[FieldError], data: Mapping[str, Any], key: str, field: str, label: str):
    value = data.get(key)
    if value is None:
        errors.append(FieldError(field, f"{label} is required"))
    elif not _is_int(value):
        errors.append(FieldError(field, f"{label} must be a whole number of minutes"))
    elif value < 0:
        errors.append(FieldError(field, f"{label} cannot be negative"))
    elif value > MAX_MINUTES:
        errors.append(FieldError(field, f"{label} cannot exceed 24 hours"))


def validate_recipe(data: Mapping[str, Any]) -> List[FieldError]:
    errors: List[FieldError] = []

    name = data.get("name")
    if _blank(name):
        errors.append(FieldError("name", "Recipe name is required"))
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(FieldError("name", "Recipe name cannot exceed 100 characters"))

    description = data.get("description")
    if _blank(description):
        errors.append(FieldError("description", "Description is required"))
    elif len(description) > MAX_DESCRIPTION_LENGTH:
        errors.append(
            FieldError("description", "Description cannot exceed 1000 characters")
        )

    ingredients = data.get("ingredients")
    if not isinstance(ingredients, list) or not ingredients:
        errors.append(
            FieldError("ingredients", "Recipe must have at least one ingredient")
        )
    else:
        for i, ing in enumerate(ingredients):
            prefix = f"ingredients[{i}]"
            if not isinstance(ing, Mapping):
                errors.append(FieldError(prefix, "Ingredient must be an object"))
                continue
            if _blank(ing.get("name")):
                errors.append(FieldError(f"{prefix}.name", "Ingredient name is required"))
            quantity = ing.get("quantity")
            if quantity is None:
                errors.append(FieldError(f"{prefix}.quantity", "Quantity is required"))
            elif not _is_number(quantity):
                errors.append(
                    FieldError(f"{prefix}.quantity", "Quantity must be a finite number")
                )
            elif quantity < 0:
                errors.append(
                    FieldError(f"{prefix}.quantity", "Quantity cannot be negative")
                )
            elif quantity > MAX_QUANTITY:
                errors.append(
                    FieldError(f"{prefix}.quantity", "Quantity cannot exceed 100000")
                )
            if _blank(ing.get("unit")):
                errors.append(FieldError(f"{prefix}.unit", "Unit is required"))

    instructions = data.get("instructions")
    if not isinstance(instructions, list) or not instructions:
        errors.append(
            FieldError("instructions", "Recipe must have at least one instruction")
        )
    else:
        for i, step in enumerate(instructions):
            if _blank(step):
                errors.append(
                    FieldError(f"instructions[{i}]", "Instructions cannot be empty")
                )

    _check_minutes(errors, data, "prep_time", "prepTime", "Preparation time")
    _check_minutes(errors, data, "cook_time", "cookTime", "Cooking time")

    servings = data.get("servings")
    if servings is None:
        errors.append(FieldError("servings", "Number of servings is required"))
    elif not _is_int(servings):
        errors.append(FieldError("servings", "Servings must be a whole number"))
    elif servings < MIN_SERVINGS:
        errors.append(FieldError("servings", "Servings must be at least 1"))
    elif servings > MAX_SERVINGS:
        errors.append(FieldError("servings", "Servings cannot exceed 100"))

    category = data.get("category")
    if category is None:
        errors.append(FieldError("category", "Category is required"))
    elif category not in RECIPE_CATEGORIES:
        errors.append(FieldError("category", f"{category} is not a valid category"))

    image_url = data.get("image_url")
    if image_url is not None and (
        not isinstance(image_url, str) or not IMAGE_URL_RE.match(image_url)
    ):
        errors.append(FieldError("imageUrl", "Image URL must be a valid URL"))

    return errors


# ---------- meal plans ----------


def parse_day_key(key: Any) -> date | None:
    """Parse a ``YYYY-MM-DD`` meals key; None when malformed or not a real date."""
    if not isinstance(key, str) or not DATE_KEY_RE.match(key):
        return None
    try:
        return date.fromisoformat(key)
    except ValueError:
        return None


def validate_meal_plan(data: Mapping[str, Any]) -> List[FieldError]:
    errors: List[FieldError] = []

    week_start = data.get("week_start_date")
    if isinstance(week_start, datetime):
        week_start = week_start.date()
    if not isinstance(week_start, date):
        errors.append(FieldError("weekStartDate", "Week start date is required"))
        week_start = None
    elif week_start.weekday() != 0:
        errors.append(FieldError("weekStartDate", "Week start date must be a Monday"))

    meals = data.get("meals")
    if meals is None:
        meals = {}
    if not isinstance(meals, Mapping):
        errors.append(FieldError("meals", "Meals must be an object keyed by date"))
        return errors

    week_end = week_start + timedelta(days=6) if week_start else None
    for key, entries in meals.items():
        day = parse_day_key(key)
        if day is None:
            errors.append(FieldError(f"meals.{key}", "Invalid date format"))
        elif week_start is not None and not (week_start <= day <= week_end):
            errors.append(FieldError(f"meals.{key}", "Date outside week range"))

        if not isinstance(entries, list):
            errors.append(FieldError(f"meals.{key}", "Meals for a day must be a list"))
            continue
        for i, meal in enumerate(entries):
            prefix = f"meals.{key}[{i}]"
            if not isinstance(meal, Mapping):
                errors.append(FieldError(prefix, "Meal must be an object"))
                continue
            meal_type = meal.get("type")
            if meal_type not in MEAL_TYPES:
                errors.append(
                    FieldError(f"{prefix}.type", f"{meal_type} is not a valid meal type")
                )
            recipe = meal.get("recipe")
            if recipe is None:
                errors.append(
                    FieldError(f"{prefix}.recipe", "Recipe reference is required")
                )
            elif not ObjectId.is_valid(recipe):
                errors.append(FieldError(f"{prefix}.recipe", "Valid recipe ID is required"))

    return errors
