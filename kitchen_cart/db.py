"""
Database Module - Upstash Redis Client

Provides the async Upstash Redis singleton used as the cart document store,
plus key and TTL conventions.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis


# Upstash uses REST_URL and REST_TOKEN
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# "redis" (default) or "memory"
CART_STORE = os.environ.get("CART_STORE", "redis").lower()


_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key prefixes."""

    CART = "cart:"  # cart:{username}
    CART_LOCK = "lock:cart:"  # lock:cart:{username}

    @staticmethod
    def cart_key(username: str) -> str:
        return f"{RedisKeys.CART}{username}"

    @staticmethod
    def cart_lock_key(username: str) -> str:
        return f"{RedisKeys.CART_LOCK}{username}"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class TTL:
    """Time-to-live constants for Redis keys (seconds, 0 = no expiry)."""

    CART = _int_env("CART_TTL_SECONDS", 0)
    # A crashed holder frees the lock after this long
    CART_LOCK = _int_env("CART_LOCK_TTL_SECONDS", 10)


# How long a request waits for another holder of the same cart lock
CART_LOCK_WAIT_SECONDS = _int_env("CART_LOCK_WAIT_SECONDS", 5)
