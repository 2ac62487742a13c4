"""Cart package: models, validation, reconciliation, storage and service facade."""
from .models import (
    AddSummary,
    Cart,
    CartItem,
    DeleteSummary,
    Recipe,
    RemoveItemSummary,
    RemoveSummary,
    ReplaceSummary,
)
from .service import CartService, get_cart_service
from .storage import CartStore, InMemoryCartStore, RedisCartStore, get_cart_store

__all__ = [
    "CartItem",
    "Cart",
    "Recipe",
    "AddSummary",
    "RemoveSummary",
    "RemoveItemSummary",
    "ReplaceSummary",
    "DeleteSummary",
    "CartService",
    "get_cart_service",
    "CartStore",
    "RedisCartStore",
    "InMemoryCartStore",
    "get_cart_store",
]
