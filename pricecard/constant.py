"""Editable built-in menu, placeholder names and receipt labels."""

from __future__ import annotations

# Shape matches the share-link payload; pricecard.data parses it into AppData.
DEFAULT_MENU: list[dict[str, object]] = [
    {
        "id": "cat-basic",
        "title": "Basic Hand Care",
        "items": [
            {"id": "item-care", "name": "Cuticle Prep & Care", "price": 500, "type": "toggle"},
            {"id": "item-removal", "name": "Gel Removal", "price": 300, "type": "toggle"},
        ],
    },
    {
        "id": "cat-gel",
        "title": "Gel Designs",
        "items": [
            {"id": "item-solid", "name": "Solid Color Gel", "price": 1000, "type": "toggle"},
            {"id": "item-cat", "name": "Cat Eye / Chrome", "price": 1200, "type": "toggle"},
        ],
    },
]

DEFAULT_MODIFIERS: list[dict[str, object]] = [
    {"id": "mod-vip", "name": "Regular Customer", "value": -10},
]

NEW_CATEGORY_TITLE = "New Category"
NEW_ITEM_NAME = "New Item"
NEW_MODIFIER_NAME = "New Discount/Fee"
NEW_MODIFIER_PERCENT = -10

NOTHING_SELECTED = "No items selected"
SUBTOTAL_LABEL = "Subtotal"
TOTAL_LABEL = "Total"
RECEIPT_SEPARATOR = "-" * 16
CURRENCY_SYMBOL = "$"

ITEM_KIND_BADGES: dict[str, str] = {
    "toggle": "✓",
    "counter": "#",
}
