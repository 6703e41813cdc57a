"""Operator-side configuration store with snapshot-per-edit updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from pricecard.constant import NEW_CATEGORY_TITLE, NEW_ITEM_NAME, NEW_MODIFIER_NAME, NEW_MODIFIER_PERCENT
from pricecard.ids import new_id
from pricecard.models import AppData, Category, ItemKind, MenuItem, Modifier, Number

logger = logging.getLogger(__name__)


def coerce_number(value: object) -> Number:
    """Coerce raw numeric input the way a number field would.

    Blank input is 0, integral text becomes an int, other numeric text a
    float, and anything unparseable becomes NaN. Never raises.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return float("nan")
    if parsed.is_integer():
        return int(parsed)
    return parsed


@dataclass(frozen=True)
class SetName:
    name: str


@dataclass(frozen=True)
class SetPrice:
    price: Number

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", coerce_number(self.price))


@dataclass(frozen=True)
class SetKind:
    kind: ItemKind

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ItemKind(self.kind))


@dataclass(frozen=True)
class SetPercent:
    percent: Number

    def __post_init__(self) -> None:
        object.__setattr__(self, "percent", coerce_number(self.percent))


ItemEdit = SetName | SetPrice | SetKind
ModifierEdit = SetName | SetPercent


def apply_item_edit(item: MenuItem, edit: ItemEdit) -> MenuItem:
    """Return a copy of item with one field replaced."""
    if isinstance(edit, SetName):
        return replace(item, name=edit.name)
    if isinstance(edit, SetPrice):
        return replace(item, price=edit.price)
    if isinstance(edit, SetKind):
        return replace(item, kind=edit.kind)
    raise TypeError(f"unsupported item edit: {edit!r}")


def apply_modifier_edit(modifier: Modifier, edit: ModifierEdit) -> Modifier:
    """Return a copy of modifier with one field replaced."""
    if isinstance(edit, SetName):
        return replace(modifier, name=edit.name)
    if isinstance(edit, SetPercent):
        return replace(modifier, percent=edit.percent)
    raise TypeError(f"unsupported modifier edit: {edit!r}")


class ConfigStore:
    """Holds the current AppData snapshot and applies operator edits.

    Every effective edit swaps in a new frozen snapshot and calls on_change.
    Edits that name an absent id leave the snapshot untouched.
    """

    def __init__(
        self,
        data: AppData | None = None,
        on_change: Callable[[AppData], None] | None = None,
    ) -> None:
        self.data = data if data is not None else AppData()
        self.on_change = on_change

    def _commit(self, data: AppData) -> AppData:
        self.data = data
        if self.on_change is not None:
            self.on_change(data)
        return data

    def _edit_category(self, cat_id: str, edit: Callable[[Category], Category | None]) -> AppData:
        categories: list[Category] = []
        found = False
        for category in self.data.categories:
            if category.id != cat_id or found:
                categories.append(category)
                continue
            found = True
            edited = edit(category)
            if edited is not None:
                categories.append(edited)
        if not found:
            return self.data
        return self._commit(replace(self.data, categories=tuple(categories)))

    def load(self, data: AppData) -> AppData:
        """Swap in a whole configuration."""
        return self._commit(data)

    def add_category(self) -> AppData:
        category = Category(id=new_id(), title=NEW_CATEGORY_TITLE)
        logger.debug("add_category id=%s", category.id)
        return self._commit(replace(self.data, categories=self.data.categories + (category,)))

    def remove_category(self, cat_id: str) -> AppData:
        """Drop a category and all its items; confirmation is the caller's job."""
        return self._edit_category(cat_id, lambda category: None)

    def rename_category(self, cat_id: str, title: str) -> AppData:
        return self._edit_category(cat_id, lambda category: replace(category, title=title))

    def add_item(self, cat_id: str) -> AppData:
        item = MenuItem(id=new_id(), name=NEW_ITEM_NAME, price=0, kind=ItemKind.TOGGLE)
        return self._edit_category(cat_id, lambda category: replace(category, items=category.items + (item,)))

    def remove_item(self, cat_id: str, item_id: str) -> AppData:
        category = self.data.find_category(cat_id)
        if category is None or all(item.id != item_id for item in category.items):
            return self.data
        return self._edit_category(
            cat_id,
            lambda category: replace(category, items=tuple(item for item in category.items if item.id != item_id)),
        )

    def update_item(self, cat_id: str, item_id: str, edit: ItemEdit) -> AppData:
        category = self.data.find_category(cat_id)
        if category is None or all(item.id != item_id for item in category.items):
            return self.data
        return self._edit_category(
            cat_id,
            lambda category: replace(
                category,
                items=tuple(apply_item_edit(item, edit) if item.id == item_id else item for item in category.items),
            ),
        )

    def add_modifier(self) -> AppData:
        modifier = Modifier(id=new_id(), name=NEW_MODIFIER_NAME, percent=NEW_MODIFIER_PERCENT)
        return self._commit(replace(self.data, modifiers=self.data.modifiers + (modifier,)))

    def update_modifier(self, mod_id: str, edit: ModifierEdit) -> AppData:
        if all(mod.id != mod_id for mod in self.data.modifiers):
            return self.data
        modifiers = tuple(apply_modifier_edit(mod, edit) if mod.id == mod_id else mod for mod in self.data.modifiers)
        return self._commit(replace(self.data, modifiers=modifiers))

    def remove_modifier(self, mod_id: str) -> AppData:
        if all(mod.id != mod_id for mod in self.data.modifiers):
            return self.data
        modifiers = tuple(mod for mod in self.data.modifiers if mod.id != mod_id)
        return self._commit(replace(self.data, modifiers=modifiers))
