"""Tests for cart input validation"""
import pytest

from kitchen_cart.cart import CartItem, Recipe
from kitchen_cart.cart.validation import (
    validate_item_text,
    validate_items,
    validate_recipe,
    validate_username,
)
from kitchen_cart.errors import InvalidInput


class TestValidateUsername:

    def test_trims(self):
        assert validate_username("  alice ") == "alice"

    def test_keeps_case(self):
        assert validate_username("Alice") == "Alice"

    def test_missing(self):
        with pytest.raises(InvalidInput, match="username is required"):
            validate_username(None)

    def test_not_a_string(self):
        with pytest.raises(InvalidInput, match="username must be a string"):
            validate_username(123)

    def test_blank(self):
        """Whitespace-only usernames are rejected."""
        with pytest.raises(InvalidInput, match="username"):
            validate_username("   ")


class TestValidateItems:

    def test_builds_cart_items(self, sample_items):
        items = validate_items(sample_items)

        assert [item.text for item in items] == ["Eggs", "Milk"]
        assert items[1].checked is True

    def test_optional_fields(self):
        items = validate_items([{"text": "bread"}])

        assert items == [CartItem(text="bread", qty=1, checked=False)]

    def test_non_positive_qty_allowed(self):
        """Whole-cart replace only type-checks quantities."""
        items = validate_items([{"text": "bread", "qty": 0}, {"text": "jam", "qty": -2.5}])

        assert [item.qty for item in items] == [0, -2.5]

    def test_not_an_array(self):
        with pytest.raises(InvalidInput, match="items must be an array"):
            validate_items("not-an-array")

    def test_item_not_object(self):
        with pytest.raises(InvalidInput, match="each item must be an object"):
            validate_items(["eggs"])

    def test_text_not_string(self):
        with pytest.raises(InvalidInput, match="item.text must be a string"):
            validate_items([{"text": 123}])

    def test_missing_text(self):
        with pytest.raises(InvalidInput, match="text"):
            validate_items([{"invalid": "item"}])

    def test_qty_not_number(self):
        with pytest.raises(InvalidInput, match="item.qty must be a number"):
            validate_items([{"text": "eggs", "qty": "2"}])

    def test_qty_bool_rejected(self):
        with pytest.raises(InvalidInput, match="item.qty must be a number"):
            validate_items([{"text": "eggs", "qty": True}])

    def test_qty_null_rejected(self):
        """An explicit null qty is present, so it must be a number."""
        with pytest.raises(InvalidInput, match="item.qty must be a number"):
            validate_items([{"text": "a", "qty": None}])

    def test_checked_null_rejected(self):
        with pytest.raises(InvalidInput, match="item.checked must be boolean"):
            validate_items([{"text": "a", "checked": None}])

    def test_checked_not_bool(self):
        with pytest.raises(InvalidInput, match="item.checked must be boolean"):
            validate_items([{"text": "eggs", "checked": "yes"}])


class TestValidateRecipe:

    def test_mapping(self):
        recipe = validate_recipe({"title": "Omelette", "ingredients": ["egg", "egg"]})

        assert recipe == Recipe(ingredients=["egg", "egg"], title="Omelette")

    def test_recipe_instance(self):
        recipe = Recipe(ingredients=("salt",))

        assert validate_recipe(recipe).ingredients == ["salt"]

    def test_object_with_ingredients(self):
        class Dish:
            ingredients = ["rice"]

        assert validate_recipe(Dish()).ingredients == ["rice"]

    def test_invalid_mentions_pass_through(self):
        """Bad mentions are dropped during reconciliation, not rejected here."""
        recipe = validate_recipe({"ingredients": ["valid", None, "", 123]})

        assert len(recipe.ingredients) == 4

    def test_missing(self):
        with pytest.raises(InvalidInput, match="recipe"):
            validate_recipe(None)

    def test_not_object(self):
        with pytest.raises(InvalidInput, match="recipe must be an object"):
            validate_recipe("pasta")

    def test_missing_ingredients(self):
        with pytest.raises(InvalidInput, match="ingredients"):
            validate_recipe({"title": "Test"})

    def test_ingredients_not_array(self):
        with pytest.raises(InvalidInput, match="recipe.ingredients must be an array"):
            validate_recipe({"ingredients": "eggs, milk"})


class TestValidateItemText:

    def test_not_trimmed(self):
        assert validate_item_text(" apple ") == " apple "

    def test_not_string(self):
        with pytest.raises(InvalidInput, match="text must be a string"):
            validate_item_text(None)
