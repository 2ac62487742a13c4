"""
Cart API Pydantic Models

Fields are deliberately loose (``Any``): shape checks belong to the cart
validator so error messages name the offending field the same way for every
caller.
"""
from typing import Any

from pydantic import BaseModel


class ReplaceCartRequest(BaseModel):
    items: Any = None


class RecipeRequest(BaseModel):
    recipe: Any = None
