"""Cart service: validate, load, reconcile, persist."""
from datetime import datetime, timezone
from typing import Any, Optional

from kitchen_cart.errors import NotFound
from kitchen_cart.logging import get_logger, sanitize_string_for_logging
from . import reconciler
from .locks import KeyedLock, RedisKeyLock
from .models import (
    AddSummary,
    Cart,
    DeleteSummary,
    RemoveItemSummary,
    RemoveSummary,
    ReplaceSummary,
)
from .storage import CartStore, RedisCartStore, get_cart_store
from .validation import (
    validate_item_text,
    validate_items,
    validate_recipe,
    validate_username,
)

logger = get_logger(__name__)


class CartService:
    """
    The only component that touches the cart store.

    Every mutating operation runs load -> reconcile -> save while holding the
    username's lock, so concurrent requests for one user cannot overwrite each
    other's increments. Different users never contend. If the save fails the
    computed cart is dropped and the stored document stays as it was.

    Pass ``remote_lock`` to extend the per-username lock across processes.
    """

    def __init__(
        self,
        store: Optional[CartStore] = None,
        remote_lock: Optional[RedisKeyLock] = None,
    ):
        self._store = store
        self._locks = KeyedLock(remote=remote_lock)

    @property
    def store(self) -> CartStore:
        if self._store is None:
            self._store = get_cart_store()
        return self._store

    async def _load(self, username: str) -> Cart:
        cart = await self.store.get(username)
        if cart is None:
            # Upsert-on-absence: a cart exists from its first write
            cart = Cart(username=username, items=[])
        return cart

    async def _save(self, cart: Cart) -> None:
        cart.updated_at = datetime.now(timezone.utc).isoformat()
        await self.store.replace(cart)

    async def get_cart(self, username: Any) -> Cart:
        """Get user's cart. An absent cart reads as empty, never as not-found."""
        username = validate_username(username)
        return await self._load(username)

    async def replace_cart(self, username: Any, items: Any) -> ReplaceSummary:
        username = validate_username(username)
        new_items = validate_items(items)

        async with self._locks.hold(username):
            cart = await self._load(username)
            updated, summary = reconciler.replace_all(cart, new_items)
            await self._save(updated)

        logger.info(
            f"Replaced cart for {sanitize_string_for_logging(username)} "
            f"({updated.total_items} items)"
        )
        return summary

    async def delete_cart(self, username: Any) -> DeleteSummary:
        username = validate_username(username)

        async with self._locks.hold(username):
            deleted = await self.store.delete(username)

        if not deleted:
            raise NotFound()
        logger.info(f"Deleted cart for {sanitize_string_for_logging(username)}")
        return DeleteSummary(deleted=True)

    async def remove_item(self, username: Any, text: Any) -> RemoveItemSummary:
        username = validate_username(username)
        text = validate_item_text(text)

        async with self._locks.hold(username):
            cart = await self._load(username)
            updated, summary = reconciler.remove_single_item(cart, text)
            if summary.removed:
                await self._save(updated)

        if summary.removed:
            logger.info(
                f"Removed '{sanitize_string_for_logging(text)}' from cart "
                f"of {sanitize_string_for_logging(username)}"
            )
        return summary

    async def add_recipe(self, username: Any, recipe: Any) -> AddSummary:
        """Merge a recipe's ingredient mentions into the cart."""
        username = validate_username(username)
        recipe = validate_recipe(recipe)

        async with self._locks.hold(username):
            cart = await self._load(username)
            updated, summary = reconciler.add_ingredients(cart, recipe)
            if summary.added_count:
                await self._save(updated)

        logger.info(
            f"Added {summary.added_count} ingredient mentions to cart of "
            f"{sanitize_string_for_logging(username)} ({summary.total_items} items)"
        )
        return summary

    async def remove_recipe(self, username: Any, recipe: Any) -> RemoveSummary:
        """Decrement the cart by a recipe's ingredient mentions."""
        username = validate_username(username)
        recipe = validate_recipe(recipe)

        async with self._locks.hold(username):
            cart = await self._load(username)
            updated, summary = reconciler.remove_ingredients(cart, recipe)
            if summary.removed:
                await self._save(updated)

        if summary.removed:
            logger.info(
                f"Removed recipe ingredients from cart of {sanitize_string_for_logging(username)}: "
                f"{summary.changed_count} changed, {len(summary.removed_texts)} depleted"
            )
        return summary


# Singleton instance
_cart_service: Optional[CartService] = None


def get_cart_service() -> CartService:
    """Get CartService singleton. Redis-backed carts also lock in Redis."""
    global _cart_service
    if _cart_service is None:
        store = get_cart_store()
        remote_lock = RedisKeyLock() if isinstance(store, RedisCartStore) else None
        _cart_service = CartService(store=store, remote_lock=remote_lock)
    return _cart_service
