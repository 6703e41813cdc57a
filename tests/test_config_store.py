"""
Tests for operator edits on the configuration store.
"""

import math

import pytest

from pricecard.config_store import (
    ConfigStore,
    SetKind,
    SetName,
    SetPercent,
    SetPrice,
    coerce_number,
)
from pricecard.constant import NEW_CATEGORY_TITLE, NEW_ITEM_NAME, NEW_MODIFIER_NAME, NEW_MODIFIER_PERCENT
from pricecard.models import ItemKind


@pytest.fixture
def store(sample_data):
    return ConfigStore(sample_data)


class TestCoerceNumber:
    def test_numbers_pass_through(self):
        assert coerce_number(12) == 12
        assert coerce_number(-2.5) == -2.5

    def test_numeric_text(self):
        assert coerce_number("500") == 500
        assert isinstance(coerce_number("500"), int)
        assert coerce_number(" -10 ") == -10
        assert coerce_number("1.5") == 1.5
        assert coerce_number("2.0") == 2

    def test_blank_is_zero(self):
        assert coerce_number("") == 0
        assert coerce_number("   ") == 0
        assert coerce_number(None) == 0

    def test_garbage_is_nan(self):
        assert math.isnan(coerce_number("abc"))
        assert math.isnan(coerce_number("-"))


class TestCategories:
    def test_add_category_appends_placeholder(self, store, sample_data):
        data = store.add_category()
        assert data.categories[:2] == sample_data.categories
        added = data.categories[-1]
        assert added.title == NEW_CATEGORY_TITLE
        assert added.items == ()
        assert added.id not in {"cat-a", "cat-b"}

    def test_remove_category_drops_items(self, store):
        data = store.remove_category("cat-a")
        assert [cat.id for cat in data.categories] == ["cat-b"]
        assert list(data.iter_items()) == []

    def test_remove_absent_category_is_noop(self, store, sample_data):
        assert store.remove_category("missing") is sample_data

    def test_rename_allows_empty_title(self, store):
        data = store.rename_category("cat-b", "")
        assert data.categories[1].title == ""

    def test_previous_snapshot_untouched(self, store, sample_data):
        store.rename_category("cat-a", "Renamed")
        assert sample_data.categories[0].title == "Hands"
        assert store.data.categories[0].title == "Renamed"


class TestItems:
    def test_add_item_defaults(self, store):
        data = store.add_item("cat-b")
        (item,) = data.categories[1].items
        assert item.name == NEW_ITEM_NAME
        assert item.price == 0
        assert item.kind is ItemKind.TOGGLE

    def test_add_item_to_missing_category(self, store, sample_data):
        assert store.add_item("missing") is sample_data

    def test_remove_item(self, store):
        data = store.remove_item("cat-a", "item-care")
        assert [item.id for item in data.categories[0].items] == ["item-art"]

    def test_remove_item_wrong_category_is_noop(self, store, sample_data):
        assert store.remove_item("cat-b", "item-care") is sample_data

    def test_update_name_price_kind(self, store):
        store.update_item("cat-a", "item-care", SetName("Deluxe Prep"))
        store.update_item("cat-a", "item-care", SetPrice("650"))
        data = store.update_item("cat-a", "item-care", SetKind(ItemKind.COUNTER))
        item = data.categories[0].items[0]
        assert (item.name, item.price, item.kind) == ("Deluxe Prep", 650, ItemKind.COUNTER)

    def test_kind_accepts_wire_value(self):
        assert SetKind("counter").kind is ItemKind.COUNTER

    def test_unparseable_price_stored_as_nan(self, store):
        data = store.update_item("cat-a", "item-art", SetPrice("twelve"))
        assert math.isnan(data.categories[0].items[1].price)

    def test_item_order_preserved(self, store):
        data = store.update_item("cat-a", "item-care", SetPrice(1))
        assert [item.id for item in data.categories[0].items] == ["item-care", "item-art"]

    def test_update_missing_item_is_noop(self, store, sample_data):
        assert store.update_item("cat-a", "missing", SetName("x")) is sample_data


class TestModifiers:
    def test_add_modifier_defaults(self, store):
        added = store.add_modifier().modifiers[-1]
        assert added.name == NEW_MODIFIER_NAME
        assert added.percent == NEW_MODIFIER_PERCENT

    def test_update_modifier(self, store):
        store.update_modifier("mod-rush", SetPercent("15"))
        data = store.update_modifier("mod-rush", SetName("Express"))
        assert data.modifiers[1].name == "Express"
        assert data.modifiers[1].percent == 15

    def test_remove_modifier(self, store):
        data = store.remove_modifier("mod-vip")
        assert [mod.id for mod in data.modifiers] == ["mod-rush"]

    def test_missing_modifier_is_noop(self, store, sample_data):
        assert store.update_modifier("missing", SetName("x")) is sample_data
        assert store.remove_modifier("missing") is sample_data


class TestOnChange:
    def test_listener_called_per_effective_edit(self, sample_data):
        seen = []
        store = ConfigStore(sample_data, on_change=seen.append)
        store.add_category()
        store.remove_item("cat-a", "missing")
        store.rename_category("cat-a", "New")
        assert len(seen) == 2
        assert seen[-1] is store.data
