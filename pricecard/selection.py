"""Customer-side selection: per-item quantities and active modifiers."""

from __future__ import annotations

from pricecard.models import ItemKind


class SelectionStore:
    """Ephemeral cart for one session.

    ``cart`` maps item id to a positive quantity; a missing key means zero.
    Both ``cart`` and ``active_modifiers`` are replaced on every change so a
    reference taken earlier keeps its old contents.
    """

    def __init__(self) -> None:
        self.cart: dict[str, int] = {}
        self.active_modifiers: frozenset[str] = frozenset()

    def quantity(self, item_id: str) -> int:
        return self.cart.get(item_id, 0)

    def set_quantity(self, item_id: str, kind: ItemKind, delta: int = 1) -> dict[str, int]:
        """Toggle items flip between 0 and 1; counters add delta, floored at 0."""
        current = self.quantity(item_id)
        if ItemKind(kind) is ItemKind.TOGGLE:
            new_qty = 0 if current > 0 else 1
        else:
            new_qty = max(0, current + delta)

        cart = dict(self.cart)
        if new_qty == 0:
            cart.pop(item_id, None)
        else:
            cart[item_id] = new_qty
        self.cart = cart
        return cart

    def toggle_modifier(self, mod_id: str) -> frozenset[str]:
        self.active_modifiers = self.active_modifiers ^ {mod_id}
        return self.active_modifiers

    def clear(self) -> None:
        self.cart = {}
        self.active_modifiers = frozenset()
