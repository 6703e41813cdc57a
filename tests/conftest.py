import pytest

from pricecard.models import AppData, Category, ItemKind, MenuItem, Modifier


@pytest.fixture
def sample_data():
    """Toggle item at 500, counter item at 300, a -10% and a +5% modifier."""
    return AppData(
        categories=(
            Category(
                id="cat-a",
                title="Hands",
                items=(
                    MenuItem(id="item-care", name="Prep", price=500, kind=ItemKind.TOGGLE),
                    MenuItem(id="item-art", name="Nail Art", price=300, kind=ItemKind.COUNTER),
                ),
            ),
            Category(id="cat-b", title="Feet", items=()),
        ),
        modifiers=(
            Modifier(id="mod-vip", name="VIP", percent=-10),
            Modifier(id="mod-rush", name="Rush", percent=5),
        ),
    )


@pytest.fixture
def cjk_data():
    return AppData(
        categories=(
            Category(
                id="cat-basic",
                title="基礎手部護理",
                items=(
                    MenuItem(id="item-care", name="精緻前置保養", price=500, kind=ItemKind.TOGGLE),
                    MenuItem(id="item-cat", name="貓眼 / 鏡面 ✦", price=1200, kind=ItemKind.COUNTER),
                ),
            ),
        ),
        modifiers=(Modifier(id="mod-vip", name="熟客優惠", percent=-10),),
    )
