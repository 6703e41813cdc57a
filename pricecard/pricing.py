"""Price calculation over a configuration snapshot and a cart."""

from __future__ import annotations

import math
from collections.abc import Mapping, Set
from decimal import ROUND_HALF_UP, Decimal

from pricecard.models import AppData, AppliedModifier, Number, Quote


def _to_decimal(value: Number) -> Decimal:
    # NaN/inf only arrive through unparseable operator input; they price as 0.
    if isinstance(value, float):
        if not math.isfinite(value):
            return Decimal(0)
        return Decimal(repr(value))
    return Decimal(value)


def _from_decimal(value: Decimal) -> Number:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def round_half_away_from_zero(value: Decimal) -> int:
    """Round to the nearest integer; .5 ties go away from zero (-0.5 -> -1).

    Works for any magnitude; quantize would trap past the context precision.
    """
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def line_amount(price: Number, qty: int) -> Number:
    """Price times quantity, with non-finite prices counted as 0."""
    return _from_decimal(_to_decimal(price) * qty)


def calculate(data: AppData, cart: Mapping[str, int], active_modifiers: Set[str]) -> Quote:
    """Compute subtotal, applied modifiers and the zero-floored total.

    Modifiers apply in configuration order, each to the subtotal (not
    compounded). Cart or modifier ids unknown to ``data`` are ignored.
    """
    subtotal = Decimal(0)
    for item in data.iter_items():
        qty = cart.get(item.id, 0)
        if qty:
            subtotal += _to_decimal(item.price) * qty

    total = subtotal
    applied: list[AppliedModifier] = []
    for modifier in data.modifiers:
        if modifier.id not in active_modifiers:
            continue
        amount = round_half_away_from_zero(subtotal * _to_decimal(modifier.percent) / 100)
        total += amount
        applied.append(AppliedModifier(name=modifier.name, percent=modifier.percent, amount=amount))

    return Quote(
        subtotal=_from_decimal(subtotal),
        total=_from_decimal(max(Decimal(0), total)),
        applied_modifiers=tuple(applied),
    )
