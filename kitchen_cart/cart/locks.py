"""
Per-username locks serializing load-compute-store cycles.

``KeyedLock`` serializes coroutines inside one process. With a
``RedisKeyLock`` attached it also holds a ``SET NX`` key in Redis, so
serverless instances sharing one Upstash database take turns as well.
"""
import asyncio
import time
import uuid
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from kitchen_cart.db import CART_LOCK_WAIT_SECONDS, TTL, RedisKeys, get_redis
from kitchen_cart.errors import StoreFailure
from kitchen_cart.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class RedisKeyLock:
    """
    Cross-process lock on ``lock:cart:{username}``.

    Acquired with ``SET key token NX EX ttl`` and polled until ``wait`` runs
    out. The TTL frees the key if a holder dies mid-operation. Timing out or
    losing Redis raises StoreFailure, which callers may retry.
    """

    def __init__(
        self,
        redis=None,
        ttl: int = TTL.CART_LOCK,
        wait: float = CART_LOCK_WAIT_SECONDS,
        poll_interval: float = 0.05,
    ):
        self._redis = redis  # Lazy initialization
        self.ttl = ttl
        self.wait = wait
        self.poll_interval = poll_interval

    @property
    def redis(self):
        if self._redis is None:
            try:
                self._redis = get_redis()
            except ValueError as e:
                logger.error(f"Redis not configured: {e}")
                raise StoreFailure() from e
        return self._redis

    async def _acquire(self, key: str, token: str) -> None:
        deadline = time.monotonic() + self.wait
        while True:
            try:
                acquired = await self.redis.set(key, token, ex=self.ttl, nx=True)
            except StoreFailure:
                raise
            except Exception as e:
                logger.error(f"Failed to acquire cart lock: {e}")
                raise StoreFailure() from e
            if acquired:
                return
            if time.monotonic() >= deadline:
                logger.warning(f"Timed out waiting for {sanitize_string_for_logging(key)}")
                raise StoreFailure()
            await asyncio.sleep(self.poll_interval)

    async def _release(self, key: str, token: str) -> None:
        try:
            # Only delete our own token; after a TTL expiry the key may belong to someone else
            if await self.redis.get(key) == token:
                await self.redis.delete(key)
        except Exception as e:
            # The key still expires on its own after the TTL
            logger.warning(f"Failed to release {sanitize_string_for_logging(key)}: {e}")

    @asynccontextmanager
    async def hold(self, username: str) -> AsyncIterator[None]:
        key = RedisKeys.cart_lock_key(username)
        token = uuid.uuid4().hex
        await self._acquire(key, token)
        try:
            yield
        finally:
            await self._release(key, token)


class KeyedLock:
    """
    One ``asyncio.Lock`` per key, created on demand, optionally backed by a
    RedisKeyLock.

    Local locks live in a WeakValueDictionary and disappear once no coroutine
    holds or waits on them. The local lock is taken first so one process never
    polls Redis against itself.
    """

    def __init__(self, remote: Optional[RedisKeyLock] = None):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()
        self.remote = remote

    def _get_lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._get_lock(key)
        async with lock:
            if self.remote is None:
                yield
            else:
                async with self.remote.hold(key):
                    yield
