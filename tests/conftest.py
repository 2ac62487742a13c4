"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock, Mock

# Set test environment variables
os.environ.setdefault("CART_STORE", "memory")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from kitchen_cart.cart import Cart, CartItem, CartService, InMemoryCartStore


@pytest.fixture
def memory_store():
    """Empty in-memory cart store"""
    return InMemoryCartStore()


@pytest.fixture
def cart_service(memory_store):
    """CartService over the in-memory store"""
    return CartService(store=memory_store)


@pytest.fixture
def mock_redis_client():
    """Mock Upstash async Redis client"""
    client = Mock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value="OK")
    client.delete = AsyncMock(return_value=1)
    return client


@pytest.fixture
def sample_items():
    """Sample cart payload"""
    return [
        {"text": "Eggs", "qty": 2, "checked": False},
        {"text": "Milk", "qty": 1, "checked": True},
    ]


@pytest.fixture
def pantry_cart():
    """Cart used by the decrement scenarios"""
    return Cart(
        username="testuser",
        items=[
            CartItem(text="eggs", qty=3),
            CartItem(text="butter", qty=2),
            CartItem(text="salt", qty=1),
        ],
    )
