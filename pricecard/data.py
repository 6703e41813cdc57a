"""Built-in default configuration."""

from __future__ import annotations

from pricecard.codec import from_payload
from pricecard.constant import DEFAULT_MENU, DEFAULT_MODIFIERS
from pricecard.models import AppData


def default_app_data() -> AppData:
    """Return the hard-coded configuration used when nothing else loads."""
    return from_payload({"menu": DEFAULT_MENU, "modifiers": DEFAULT_MODIFIERS})


DEFAULT_APP_DATA: AppData = default_app_data()
