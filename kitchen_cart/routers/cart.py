"""
Cart Router

Thin HTTP wrappers around CartService. Cart errors keep their own status code
and message; anything else is logged and reported as a generic 500.
"""
from typing import NoReturn, Optional

from fastapi import APIRouter, HTTPException

from kitchen_cart.cart import Cart, get_cart_service
from kitchen_cart.errors import (
    ERROR_ITEMS_REQUIRED,
    ERROR_RECIPE_REQUIRED,
    CartError,
    InvalidInput,
)
from kitchen_cart.logging import get_logger
from .models import RecipeRequest, ReplaceCartRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _format_cart_response(cart: Cart) -> dict:
    return {
        "username": cart.username,
        "items": [item.to_dict() for item in cart.items],
    }


def _raise_http(error: Exception, action: str) -> NoReturn:
    if isinstance(error, CartError):
        raise HTTPException(status_code=error.status_code, detail=error.message)
    logger.error(f"Failed to {action}: {error}", exc_info=True)
    raise HTTPException(status_code=500, detail=f"Failed to {action}")


@router.get("/{username}")
async def get_cart(username: str):
    """Get user's cart (empty when none exists)."""
    try:
        cart = await get_cart_service().get_cart(username)
    except Exception as e:
        _raise_http(e, "retrieve cart")
    return _format_cart_response(cart)


@router.put("/{username}")
async def replace_cart(username: str, request: Optional[ReplaceCartRequest] = None):
    """Replace the whole cart."""
    try:
        if request is None or request.items is None:
            raise InvalidInput(ERROR_ITEMS_REQUIRED)
        summary = await get_cart_service().replace_cart(username, request.items)
    except Exception as e:
        _raise_http(e, "save cart")
    return summary.to_dict()


@router.delete("/{username}")
async def delete_cart(username: str):
    """Delete the cart. 404 when the user has none."""
    try:
        summary = await get_cart_service().delete_cart(username)
    except Exception as e:
        _raise_http(e, "delete cart")
    return summary.to_dict()


@router.delete("/{username}/items")
async def remove_cart_item(username: str, text: Optional[str] = None):
    """Remove one item by exact text."""
    try:
        summary = await get_cart_service().remove_item(username, text)
    except Exception as e:
        _raise_http(e, "remove item")
    return summary.to_dict()


@router.post("/{username}/add-recipe")
async def add_recipe_to_cart(username: str, request: Optional[RecipeRequest] = None):
    """Add a recipe's ingredients to the cart."""
    try:
        if request is None or request.recipe is None:
            raise InvalidInput(ERROR_RECIPE_REQUIRED)
        summary = await get_cart_service().add_recipe(username, request.recipe)
    except Exception as e:
        _raise_http(e, "add recipe to cart")
    return summary.to_dict()


@router.post("/{username}/remove-recipe")
async def remove_recipe_from_cart(username: str, request: Optional[RecipeRequest] = None):
    """Decrement the cart by a recipe's ingredients."""
    try:
        summary = await get_cart_service().remove_recipe(
            username, request.recipe if request else None
        )
    except Exception as e:
        _raise_http(e, "remove recipe from cart")
    return summary.to_dict()
