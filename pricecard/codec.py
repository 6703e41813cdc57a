"""Share-link codec: AppData <-> base64 JSON token for a URL fragment."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
from typing import Any
from urllib.parse import unquote

from pricecard.models import AppData, Category, ItemKind, MenuItem, Modifier, Number

logger = logging.getLogger(__name__)


class ConfigFormatError(ValueError):
    """Raised when a decoded payload does not have the configuration shape."""


def _number_out(value: Number) -> Number | None:
    # JSON has no NaN/Infinity; null keeps tokens readable by plain JSON parsers.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def to_payload(data: AppData) -> dict[str, Any]:
    """Build the JSON-ready dict for a configuration."""
    return {
        "menu": [
            {
                "id": category.id,
                "title": category.title,
                "items": [
                    {
                        "id": item.id,
                        "name": item.name,
                        "price": _number_out(item.price),
                        "type": item.kind.value,
                    }
                    for item in category.items
                ],
            }
            for category in data.categories
        ],
        "modifiers": [
            {"id": mod.id, "name": mod.name, "value": _number_out(mod.percent)}
            for mod in data.modifiers
        ],
    }


def _require(obj: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if key not in obj:
        raise ConfigFormatError(f"missing field {key!r}")
    value = obj[key]
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ConfigFormatError(f"field {key!r} has unexpected type {type(value).__name__}")
    return value


def _number_in(obj: dict[str, Any], key: str) -> Number:
    if obj.get(key, 0) is None:
        return float("nan")
    if key not in obj:
        raise ConfigFormatError(f"missing field {key!r}")
    return _require(obj, key, (int, float))


def _as_dict(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigFormatError(f"{what} must be an object")
    return value


def _parse_item(raw: Any) -> MenuItem:
    obj = _as_dict(raw, "item")
    kind_value = _require(obj, "type", str)
    try:
        kind = ItemKind(kind_value)
    except ValueError as exc:
        raise ConfigFormatError(f"unknown item type {kind_value!r}") from exc
    return MenuItem(
        id=_require(obj, "id", str),
        name=_require(obj, "name", str),
        price=_number_in(obj, "price"),
        kind=kind,
    )


def _parse_category(raw: Any) -> Category:
    obj = _as_dict(raw, "category")
    items = _require(obj, "items", list)
    return Category(
        id=_require(obj, "id", str),
        title=_require(obj, "title", str),
        items=tuple(_parse_item(item) for item in items),
    )


def _parse_modifier(raw: Any) -> Modifier:
    obj = _as_dict(raw, "modifier")
    return Modifier(
        id=_require(obj, "id", str),
        name=_require(obj, "name", str),
        percent=_number_in(obj, "value"),
    )


def from_payload(payload: Any) -> AppData:
    """Parse a decoded JSON value into AppData.

    A bare list is the legacy link shape (menu only) and gets no modifiers.
    Raises ConfigFormatError on anything else that does not fit.
    """
    if isinstance(payload, list):
        categories_raw: Any = payload
        modifiers_raw: Any = []
    elif isinstance(payload, dict):
        categories_raw = payload.get("menu", payload.get("categories"))
        modifiers_raw = payload.get("modifiers") or []
    else:
        raise ConfigFormatError("payload must be an object or a list")

    if not isinstance(categories_raw, list):
        raise ConfigFormatError("menu must be a list")
    if not isinstance(modifiers_raw, list):
        raise ConfigFormatError("modifiers must be a list")

    return AppData(
        categories=tuple(_parse_category(cat) for cat in categories_raw),
        modifiers=tuple(_parse_modifier(mod) for mod in modifiers_raw),
    )


def dumps(data: AppData) -> str:
    """Serialize a configuration to compact JSON text."""
    return json.dumps(to_payload(data), ensure_ascii=False, separators=(",", ":"))


def encode(data: AppData) -> str:
    """Encode a configuration as a fragment-safe token, or "" if that fails."""
    try:
        raw = dumps(data).encode("utf-8")
    except (TypeError, ValueError, AttributeError) as exc:
        logger.error("encode_failed error=%r", exc)
        return ""
    return base64.b64encode(raw).decode("ascii")


def decode(token: str) -> AppData | None:
    """Decode a fragment token; returns None for anything unusable."""
    cleaned = unquote(token.strip().lstrip("#"))
    if not cleaned:
        return None
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned, validate=True)
        payload = json.loads(raw.decode("utf-8"))
        return from_payload(payload)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        logger.debug("decode_failed error=%r", exc)
        return None
