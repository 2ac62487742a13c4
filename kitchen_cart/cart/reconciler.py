"""
Ingredient reconciliation.

Pure functions of ``(Cart, input) -> (Cart, summary)``. The input cart is never
mutated and no function here raises: everything arriving has already been
through ``validation``.

Invariants kept by every merge and unmerge:
- item texts are unique (exact, case-sensitive match)
- every item has qty >= 1; an item that would reach 0 is removed
- ``checked`` is only ever dropped together with its item
"""
from typing import Any, Dict, Iterable, List, Tuple

from .models import (
    AddSummary,
    Cart,
    CartItem,
    Recipe,
    RemoveItemSummary,
    RemoveSummary,
    ReplaceSummary,
)


def count_mentions(ingredients: Iterable[Any]) -> Dict[str, int]:
    """
    Frequency map of ingredient mentions, in order of first appearance.

    Non-strings and blank strings are skipped; names are trimmed.
    ``["egg", "egg", "egg"]`` -> ``{"egg": 3}``.
    """
    counts: Dict[str, int] = {}
    for raw in ingredients:
        if not isinstance(raw, str):
            continue
        name = raw.strip()
        if not name:
            continue
        counts[name] = counts.get(name, 0) + 1
    return counts


def replace_all(cart: Cart, items: List[CartItem]) -> Tuple[Cart, ReplaceSummary]:
    """Swap the item list wholesale. The caller supplies an already-deduplicated set."""
    updated = Cart(
        username=cart.username,
        items=[CartItem(item.text, item.qty, item.checked) for item in items],
        updated_at=cart.updated_at,
    )
    return updated, ReplaceSummary(success=True)


def add_ingredients(cart: Cart, recipe: Recipe) -> Tuple[Cart, AddSummary]:
    """Increment existing items by mention count, append new ones unchecked."""
    counts = count_mentions(recipe.ingredients)
    updated = cart.copy()

    for text, count in counts.items():
        existing = updated.find(text)
        if existing:
            existing.qty += count
        else:
            updated.items.append(CartItem(text=text, qty=count, checked=False))

    return updated, AddSummary(
        added_count=sum(counts.values()),
        total_items=updated.total_items,
    )


def remove_ingredients(cart: Cart, recipe: Recipe) -> Tuple[Cart, RemoveSummary]:
    """
    Decrement items by mention count, dropping any that reach zero.

    Names the cart does not hold are ignored. Over-removal empties the item
    instead of going negative. Items are walked last to first, so depleted
    names are reported in that order; survivors keep their cart order.
    """
    counts = count_mentions(recipe.ingredients)
    if not counts or not cart.items:
        return cart.copy(), RemoveSummary(
            removed=False,
            changed_count=0,
            items=cart.copy().items,
        )

    kept: List[CartItem] = []
    removed_texts: List[str] = []
    changed = 0

    for item in reversed(cart.items):
        count = counts.get(item.text)
        if not count:
            kept.append(CartItem(item.text, item.qty, item.checked))
            continue
        changed += 1
        remaining = item.qty - count
        if remaining <= 0:
            removed_texts.append(item.text)
        else:
            kept.append(CartItem(item.text, remaining, item.checked))
    kept.reverse()

    updated = Cart(username=cart.username, items=kept, updated_at=cart.updated_at)
    return updated, RemoveSummary(
        removed=changed > 0,
        changed_count=changed,
        items=updated.copy().items,
        removed_texts=removed_texts,
    )


def remove_single_item(cart: Cart, text: str) -> Tuple[Cart, RemoveItemSummary]:
    """Drop the item whose text matches exactly. A miss is a no-op, not an error."""
    updated = cart.copy()
    remaining = [item for item in updated.items if item.text != text]
    removed = len(remaining) != len(updated.items)
    updated.items = remaining
    return updated, RemoveItemSummary(removed=removed, items=updated.copy().items)


__all__ = [
    "count_mentions",
    "replace_all",
    "add_ingredients",
    "remove_ingredients",
    "remove_single_item",
]
