"""
Tests for cart models
"""

from kitchen_cart.cart import (
    AddSummary,
    Cart,
    CartItem,
    RemoveItemSummary,
    RemoveSummary,
)


class TestCartItem:
    """Tests for CartItem dataclass."""

    def test_defaults(self):
        """New items are unchecked with a single unit."""
        item = CartItem(text="flour")

        assert item.qty == 1
        assert item.checked is False

    def test_from_dict_fills_missing_fields(self):
        """Missing qty reads as 1 and missing checked as False."""
        item = CartItem.from_dict({"text": "basil"})

        assert item.text == "basil"
        assert item.qty == 1
        assert item.checked is False

    def test_from_dict_keeps_values(self):
        item = CartItem.from_dict({"text": "rice", "qty": 999999, "checked": True})

        assert item.qty == 999999
        assert item.checked is True


class TestCart:
    """Tests for Cart dataclass."""

    def test_create_empty_cart(self):
        cart = Cart(username="testuser")

        assert cart.items == []
        assert cart.total_items == 0

    def test_find_is_exact_match(self):
        """Lookup by text is exact and case-sensitive."""
        cart = Cart(username="testuser", items=[CartItem(text="Tomato")])

        assert cart.find("Tomato") is not None
        assert cart.find("tomato") is None
        assert cart.find(" Tomato") is None

    def test_copy_does_not_share_items(self):
        cart = Cart(username="testuser", items=[CartItem(text="onion", qty=2)])

        clone = cart.copy()
        clone.items[0].qty = 5

        assert cart.items[0].qty == 2

    def test_cart_serialization(self):
        """Cart survives a trip through its storage dict."""
        cart = Cart(
            username="testuser",
            items=[
                CartItem(text="jalapeño peppers", qty=1),
                CartItem(text="crème fraîche", qty=2, checked=True),
            ],
            updated_at="2025-01-01T00:00:00+00:00",
        )

        restored = Cart.from_dict(cart.to_dict())

        assert restored.username == "testuser"
        assert restored.texts == ["jalapeño peppers", "crème fraîche"]
        assert restored.items[1].checked is True
        assert restored.updated_at == "2025-01-01T00:00:00+00:00"

    def test_from_dict_without_items(self):
        cart = Cart.from_dict({"username": "testuser", "items": None})

        assert cart.items == []


class TestSummaries:
    """Summaries serialize with the API field names."""

    def test_add_summary(self):
        assert AddSummary(added_count=3, total_items=2).to_dict() == {
            "success": True,
            "addedCount": 3,
            "totalItems": 2,
        }

    def test_remove_summary(self):
        summary = RemoveSummary(
            removed=True,
            changed_count=1,
            items=[CartItem(text="salt")],
            removed_texts=["eggs"],
        )

        assert summary.to_dict() == {
            "removed": True,
            "changedCount": 1,
            "items": [{"text": "salt", "qty": 1, "checked": False}],
            "removedTexts": ["eggs"],
        }

    def test_remove_item_summary(self):
        assert RemoveItemSummary(removed=False, items=[]).to_dict() == {
            "removed": False,
            "items": [],
        }
