"""Runtime configuration defaults for caching, sharing and logging."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("PRICECARD_DB_PATH", "data/pricecard.db")
CACHE_KEY = os.environ.get("PRICECARD_CACHE_KEY", "pricecardData")

# Page address the share link is built on; the token goes in the fragment.
SHARE_BASE_URL = os.environ.get("PRICECARD_BASE_URL", "https://localhost/pricecard/")

LOG_PATH = os.environ.get("PRICECARD_LOG_PATH", "/tmp/pricecard.log")
LOG_LEVEL = os.environ.get("PRICECARD_LOG_LEVEL", "INFO")

RECEIPT_HEADER = os.environ.get("PRICECARD_RECEIPT_HEADER", "✦ Service Summary ✦")
COPIED_FLASH_SECONDS = 2.0
