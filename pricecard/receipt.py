"""Plain-text receipt for copying to the clipboard."""

from __future__ import annotations

from collections.abc import Mapping, Set

from pricecard.config import RECEIPT_HEADER
from pricecard.constant import CURRENCY_SYMBOL, NOTHING_SELECTED, RECEIPT_SEPARATOR, SUBTOTAL_LABEL, TOTAL_LABEL
from pricecard.models import AppData, AppliedModifier, Number, Quote
from pricecard.pricing import calculate, line_amount


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_money(value: Number) -> str:
    return f"{CURRENCY_SYMBOL}{format_number(value)}"


def format_signed_money(amount: int) -> str:
    """Render +$10 / $-10 / $0; negatives keep their own sign after the symbol."""
    if amount > 0:
        return f"+{format_money(amount)}"
    return format_money(amount)


def format_modifier_line(applied: AppliedModifier) -> str:
    return f"{applied.name} ({format_number(applied.percent)}%): {format_signed_money(applied.amount)}"


def item_lines(data: AppData, cart: Mapping[str, int]) -> list[str]:
    """One line per selected item, in menu order."""
    lines: list[str] = []
    for item in data.iter_items():
        qty = cart.get(item.id, 0)
        if qty <= 0:
            continue
        qty_part = f" x{qty}" if qty > 1 else ""
        lines.append(f"{item.name}{qty_part} {format_money(line_amount(item.price, qty))}")
    return lines


def format_receipt(
    data: AppData,
    cart: Mapping[str, int],
    active_modifiers: Set[str],
    header: str = RECEIPT_HEADER,
) -> str:
    """Build the copyable receipt text, or NOTHING_SELECTED for an empty cart."""
    lines = item_lines(data, cart)
    if not lines:
        return NOTHING_SELECTED

    quote = calculate(data, cart, active_modifiers)
    out = [header, "", *lines]
    if quote.applied_modifiers:
        out.append("")
        out.append(f"{SUBTOTAL_LABEL}: {format_money(quote.subtotal)}")
        out.extend(format_modifier_line(applied) for applied in quote.applied_modifiers)
    out.append(RECEIPT_SEPARATOR)
    out.append(f"{TOTAL_LABEL}: {format_money(quote.total)}")
    return "\n".join(out)


def should_show_receipt(quote: Quote, active_modifiers: Set[str]) -> bool:
    """The preview and copy button stay hidden while nothing is priced."""
    return quote.total != 0 or bool(active_modifiers)
