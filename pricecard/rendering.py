"""rich Text helpers for the menu, modifier and footer panes."""

from __future__ import annotations

from rich.text import Text

from pricecard.constant import ITEM_KIND_BADGES
from pricecard.models import Category, MenuItem, Modifier, Quote
from pricecard.receipt import format_money, format_number


def badge_style(kind: str) -> str:
    """Return a consistent badge style for item kinds."""
    if kind == "counter":
        return "bold #ffffff on #2f6db5"
    return "bold #ffffff on #b23a48"


def format_category_title(category: Category, pointer: str = "") -> Text:
    text = Text()
    text.append(pointer)
    text.append(category.title or "(untitled)", style="bold underline")
    return text


def format_item_row(item: MenuItem, qty: int, pointer: str, editing: bool) -> Text:
    """Render one menu item; edit rows show the kind badge, view rows the selection."""
    text = Text()
    text.append(pointer)
    if editing:
        badge = ITEM_KIND_BADGES.get(item.kind.value, "?")
        text.append(f" {badge} ", style=badge_style(item.kind.value))
        text.append(f" {item.name} ")
        text.append(format_money(item.price), style="dim")
        return text

    selected = qty > 0
    if item.kind.value == "counter":
        text.append(f"[- {qty} +] ", style="bold #b23a48" if selected else "dim")
    else:
        text.append("[♥] " if selected else "[ ] ", style="bold #b23a48" if selected else "dim")
    text.append(item.name, style="bold" if selected else "")
    text.append(f"  {format_money(item.price)}", style="dim")
    return text


def format_percent(percent: int | float) -> str:
    sign = "+" if percent > 0 else ""
    return f"{sign}{format_number(percent)}%"


def format_modifier_row(modifier: Modifier, active: bool, pointer: str, editing: bool) -> Text:
    text = Text()
    text.append(pointer)
    if editing:
        text.append(f"{modifier.name} ")
        text.append(format_percent(modifier.percent), style="dim")
        return text
    chip_style = "bold #ffffff on #3a3a3a" if active else ""
    text.append(f" {modifier.name} {format_percent(modifier.percent)} ", style=chip_style)
    return text


def format_total(quote: Quote) -> Text:
    text = Text()
    text.append("Estimated total  ", style="dim")
    text.append(format_money(quote.total), style="bold #b23a48")
    return text


def format_share_link(share_url: str, environment_safe: bool, copied: bool) -> Text:
    """Footer for edit mode: the live share link or a deployment warning."""
    text = Text()
    if not environment_safe:
        text.append("⚠ Deploy the page to get a full share link", style="bold #c28a00")
        return text
    if not share_url:
        text.append("Share link unavailable", style="bold #c28a00")
        return text
    text.append("Share link (auto-updated)\n", style="dim")
    text.append(share_url)
    text.append("\n")
    text.append("Copied!" if copied else "Press C to copy", style="bold #3a8a3a" if copied else "dim")
    return text
