"""
Cart Errors

Typed errors raised by the validator, the service and the store, plus the
shared message constants (kept in one place to avoid string duplication).
"""

# Input errors
ERROR_USERNAME_REQUIRED = "username is required"
ERROR_USERNAME_NOT_STRING = "username must be a string"
ERROR_USERNAME_EMPTY = "username must not be empty"
ERROR_ITEMS_REQUIRED = "items required"
ERROR_ITEMS_NOT_ARRAY = "items must be an array"
ERROR_ITEM_NOT_OBJECT = "each item must be an object"
ERROR_ITEM_TEXT = "item.text must be a string"
ERROR_ITEM_QTY = "item.qty must be a number"
ERROR_ITEM_CHECKED = "item.checked must be boolean"
ERROR_TEXT_NOT_STRING = "text must be a string"
ERROR_RECIPE_REQUIRED = "recipe required"
ERROR_RECIPE_NOT_OBJECT = "recipe must be an object"
ERROR_RECIPE_INGREDIENTS = "recipe.ingredients must be an array"

# Lookup errors
ERROR_CART_NOT_FOUND = "No cart found to delete"

# Store errors (generic on purpose, storage details stay in the logs)
ERROR_STORE_UNAVAILABLE = "Cart service unavailable"


class CartError(Exception):
    """Base class for every error surfaced by the cart engine."""

    status_code = 500
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(CartError):
    """Caller-supplied data failed a type or shape check."""

    status_code = 400


class NotFound(CartError):
    """Delete requested for a user without a cart."""

    status_code = 404

    def __init__(self, message: str = ERROR_CART_NOT_FOUND):
        super().__init__(message)


class StoreFailure(CartError):
    """The persistence layer could not complete a read or write."""

    status_code = 503
    retryable = True

    def __init__(self, message: str = ERROR_STORE_UNAVAILABLE):
        super().__init__(message)


__all__ = [
    "CartError",
    "InvalidInput",
    "NotFound",
    "StoreFailure",
]
