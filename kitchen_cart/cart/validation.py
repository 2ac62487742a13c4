"""
Cart input validation.

Untrusted values (request bodies, path params) are checked here once and turned
into typed models. Nothing past this module sees unvalidated data.
"""
from collections.abc import Mapping
from typing import Any, List

from kitchen_cart.errors import (
    ERROR_ITEM_CHECKED,
    ERROR_ITEM_NOT_OBJECT,
    ERROR_ITEM_QTY,
    ERROR_ITEM_TEXT,
    ERROR_ITEMS_NOT_ARRAY,
    ERROR_RECIPE_INGREDIENTS,
    ERROR_RECIPE_NOT_OBJECT,
    ERROR_RECIPE_REQUIRED,
    ERROR_TEXT_NOT_STRING,
    ERROR_USERNAME_EMPTY,
    ERROR_USERNAME_NOT_STRING,
    ERROR_USERNAME_REQUIRED,
    InvalidInput,
)
from .models import CartItem, Recipe


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a quantity
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_username(value: Any) -> str:
    """Return the trimmed username or raise InvalidInput."""
    if value is None:
        raise InvalidInput(ERROR_USERNAME_REQUIRED)
    if not isinstance(value, str):
        raise InvalidInput(ERROR_USERNAME_NOT_STRING)
    username = value.strip()
    if not username:
        raise InvalidInput(ERROR_USERNAME_EMPTY)
    return username


def validate_items(items: Any) -> List[CartItem]:
    """
    Check a whole-cart payload and build CartItems from it.

    Quantities are type-checked only; a caller replacing the whole cart may
    store any numeric qty.
    """
    if not _is_sequence(items):
        raise InvalidInput(ERROR_ITEMS_NOT_ARRAY)

    validated = []
    for raw in items:
        if isinstance(raw, CartItem):
            raw = raw.to_dict()
        if not isinstance(raw, Mapping):
            raise InvalidInput(ERROR_ITEM_NOT_OBJECT)
        if not isinstance(raw.get("text"), str):
            raise InvalidInput(ERROR_ITEM_TEXT)
        # Present-but-null counts as present
        if "qty" in raw and not _is_number(raw["qty"]):
            raise InvalidInput(ERROR_ITEM_QTY)
        if "checked" in raw and not isinstance(raw["checked"], bool):
            raise InvalidInput(ERROR_ITEM_CHECKED)
        validated.append(CartItem.from_dict(raw))
    return validated


def validate_recipe(recipe: Any) -> Recipe:
    """Accept a Recipe, a mapping or any object exposing ``ingredients``."""
    if recipe is None:
        raise InvalidInput(ERROR_RECIPE_REQUIRED)
    if isinstance(recipe, Recipe):
        ingredients, title = recipe.ingredients, recipe.title
    elif isinstance(recipe, Mapping):
        ingredients, title = recipe.get("ingredients"), recipe.get("title")
    elif hasattr(recipe, "ingredients"):
        ingredients, title = recipe.ingredients, getattr(recipe, "title", None)
    else:
        raise InvalidInput(ERROR_RECIPE_NOT_OBJECT)

    if not _is_sequence(ingredients):
        raise InvalidInput(ERROR_RECIPE_INGREDIENTS)
    return Recipe(
        ingredients=list(ingredients),
        title=title if isinstance(title, str) else None,
    )


def validate_item_text(text: Any) -> str:
    """Item text for single-item removal. Not trimmed: matching is exact."""
    if not isinstance(text, str):
        raise InvalidInput(ERROR_TEXT_NOT_STRING)
    return text
