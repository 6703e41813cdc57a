"""Short random identifiers for new menu entities."""

from __future__ import annotations

import secrets
import string

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def new_id() -> str:
    """Return a short random key; uniqueness is probabilistic only."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
