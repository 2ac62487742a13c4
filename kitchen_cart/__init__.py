"""
Kitchen Cart

Recipe shopping-cart engine:
- cart: models, validation, ingredient reconciliation, stores, service
- db: Upstash Redis client and key conventions
- routers: FastAPI endpoints
- errors: typed cart errors

Note: Imports are lazy to keep module loading cheap in serverless environments.
"""

__all__ = [
    "get_redis",
    "get_cart_service",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "get_redis":
        from kitchen_cart.db import get_redis
        return get_redis
    elif name == "get_cart_service":
        from kitchen_cart.cart import get_cart_service
        return get_cart_service
    raise AttributeError(f"module 'kitchen_cart' has no attribute '{name}'")
