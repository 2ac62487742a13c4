"""Cart document stores: one document per username, get / replace / delete."""
import json
from abc import ABC, abstractmethod
from typing import Dict, Optional

from kitchen_cart.db import CART_STORE, TTL, RedisKeys, get_redis
from kitchen_cart.errors import StoreFailure
from kitchen_cart.logging import get_logger, sanitize_string_for_logging
from .models import Cart

logger = get_logger(__name__)


class CartStore(ABC):
    """Persistence contract for carts. No business logic lives here."""

    @abstractmethod
    async def get(self, username: str) -> Optional[Cart]:
        """Return the stored cart or None when the user has none."""

    @abstractmethod
    async def replace(self, cart: Cart) -> None:
        """Upsert the whole document."""

    @abstractmethod
    async def delete(self, username: str) -> bool:
        """Delete the document. Returns False when there was nothing to delete."""


class RedisCartStore(CartStore):
    """
    Carts as JSON strings in Upstash Redis.

    Each write is a single SET of the full document, so a failed write leaves
    the previous document untouched.
    """

    def __init__(self, redis=None, ttl: int = TTL.CART):
        self._redis = redis  # Lazy initialization
        self.ttl = ttl

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis()
            except ValueError as e:
                logger.error(f"Redis not configured: {e}")
                raise StoreFailure() from e
        return self._redis

    async def get(self, username: str) -> Optional[Cart]:
        key = RedisKeys.cart_key(username)
        try:
            data = await self.redis.get(key)
        except StoreFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to get cart from Redis: {e}")
            raise StoreFailure() from e

        if not data:
            return None

        try:
            return Cart.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            # Corrupted data - clear it and treat the cart as absent
            logger.warning(
                f"Corrupted cart data for user {sanitize_string_for_logging(username)}: {e}"
            )
            await self._delete_key(key)
            return None

    async def replace(self, cart: Cart) -> None:
        key = RedisKeys.cart_key(cart.username)
        payload = json.dumps(cart.to_dict())
        try:
            if self.ttl > 0:
                await self.redis.set(key, payload, ex=self.ttl)
            else:
                await self.redis.set(key, payload)
        except StoreFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to save cart to Redis: {e}")
            raise StoreFailure() from e

    async def delete(self, username: str) -> bool:
        deleted = await self._delete_key(RedisKeys.cart_key(username))
        return deleted > 0

    async def _delete_key(self, key: str) -> int:
        try:
            return int(await self.redis.delete(key) or 0)
        except StoreFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to delete cart from Redis: {e}")
            raise StoreFailure() from e


class InMemoryCartStore(CartStore):
    """Dict-backed store for tests and local runs (``CART_STORE=memory``)."""

    def __init__(self):
        self._docs: Dict[str, dict] = {}

    async def get(self, username: str) -> Optional[Cart]:
        doc = self._docs.get(username)
        return Cart.from_dict(doc) if doc is not None else None

    async def replace(self, cart: Cart) -> None:
        # Serialized copy: callers never share item objects with the store
        self._docs[cart.username] = cart.to_dict()

    async def delete(self, username: str) -> bool:
        return self._docs.pop(username, None) is not None


# Singleton instance
_cart_store: Optional[CartStore] = None


def get_cart_store() -> CartStore:
    """Get CartStore singleton for the configured backend."""
    global _cart_store
    if _cart_store is None:
        if CART_STORE == "memory":
            _cart_store = InMemoryCartStore()
        else:
            _cart_store = RedisCartStore()
    return _cart_store
