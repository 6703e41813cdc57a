"""Domain models for pricecard."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

Number = int | float


class ItemKind(str, Enum):
    """How a menu item is selected by the customer."""

    TOGGLE = "toggle"
    COUNTER = "counter"


@dataclass(frozen=True)
class MenuItem:
    """A priced item inside a category."""

    id: str
    name: str
    price: Number = 0
    kind: ItemKind = ItemKind.TOGGLE


@dataclass(frozen=True)
class Category:
    """A titled, ordered group of menu items."""

    id: str
    title: str
    items: tuple[MenuItem, ...] = ()


@dataclass(frozen=True)
class Modifier:
    """A named percentage surcharge (positive) or discount (negative)."""

    id: str
    name: str
    percent: Number = 0


@dataclass(frozen=True)
class AppData:
    """The full editable configuration; the unit of sharing and caching."""

    categories: tuple[Category, ...] = ()
    modifiers: tuple[Modifier, ...] = ()

    def find_category(self, cat_id: str) -> Category | None:
        for category in self.categories:
            if category.id == cat_id:
                return category
        return None

    def iter_items(self):
        """Yield every item of every category in display order."""
        for category in self.categories:
            yield from category.items


@dataclass(frozen=True)
class AppliedModifier:
    """A modifier that took part in a price calculation."""

    name: str
    percent: Number
    amount: int


@dataclass(frozen=True)
class Quote:
    """Result of a price calculation."""

    subtotal: Number
    total: Number
    applied_modifiers: tuple[AppliedModifier, ...] = field(default_factory=tuple)
