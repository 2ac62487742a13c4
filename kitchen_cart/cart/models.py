"""Cart models: items keyed by ingredient text, recipes and operation summaries."""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

Quantity = Union[int, float]


@dataclass
class CartItem:
    """Single ingredient line in the cart."""
    text: str
    qty: Quantity = 1
    checked: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "qty": self.qty,
            "checked": self.checked,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from dictionary. Missing qty reads as 1, missing checked as False."""
        qty = data.get("qty")
        return cls(
            text=data["text"],
            qty=1 if qty is None else qty,
            checked=bool(data.get("checked", False)),
        )


@dataclass
class Cart:
    """Per-user shopping cart. Items are unique by text and kept in insertion order."""
    username: str
    items: List[CartItem] = field(default_factory=list)
    updated_at: str = ""

    @property
    def total_items(self) -> int:
        """Number of distinct items in the cart."""
        return len(self.items)

    @property
    def texts(self) -> List[str]:
        return [item.text for item in self.items]

    def find(self, text: str) -> Optional[CartItem]:
        """Exact-text lookup."""
        return next((item for item in self.items if item.text == text), None)

    def copy(self) -> "Cart":
        """Deep copy, so reconciler results never share items with their input."""
        return Cart(
            username=self.username,
            items=[CartItem(item.text, item.qty, item.checked) for item in self.items],
            updated_at=self.updated_at,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for Redis storage."""
        return {
            "username": self.username,
            "items": [item.to_dict() for item in self.items],
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Cart":
        """Create from dictionary."""
        items = [CartItem.from_dict(item) for item in data.get("items") or []]
        return cls(
            username=data["username"],
            items=items,
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class Recipe:
    """The part of a recipe the cart engine reads: its ingredient mentions."""
    ingredients: List[Any]
    title: Optional[str] = None


# ==================== SUMMARIES ====================

@dataclass
class ReplaceSummary:
    success: bool = True

    def to_dict(self) -> dict:
        return {"success": self.success}


@dataclass
class DeleteSummary:
    deleted: bool = True

    def to_dict(self) -> dict:
        return {"deleted": self.deleted}


@dataclass
class AddSummary:
    """Result of merging a recipe into a cart."""
    added_count: int
    total_items: int
    success: bool = True

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "addedCount": self.added_count,
            "totalItems": self.total_items,
        }


@dataclass
class RemoveSummary:
    """Result of decrementing a cart by a recipe."""
    removed: bool
    changed_count: int
    items: List[CartItem]
    removed_texts: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "removed": self.removed,
            "changedCount": self.changed_count,
            "items": [item.to_dict() for item in self.items],
            "removedTexts": list(self.removed_texts),
        }


@dataclass
class RemoveItemSummary:
    removed: bool
    items: List[CartItem]

    def to_dict(self) -> dict:
        return {
            "removed": self.removed,
            "items": [item.to_dict() for item in self.items],
        }
