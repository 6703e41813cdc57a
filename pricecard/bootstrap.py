"""Load-order and sync glue between the stores and the outside world.

Configuration is taken from the share link fragment first, then the local
cache, then the built-in defaults. While the operator edits, every change is
written back to the cache and into the link fragment. All outside calls are
best-effort: failures are logged and never change application state.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol
from urllib.parse import urldefrag, urlsplit

from pricecard.codec import dumps, decode, encode, from_payload
from pricecard.config import CACHE_KEY, SHARE_BASE_URL
from pricecard.data import DEFAULT_APP_DATA
from pricecard.models import AppData

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    EDIT = "edit"
    VIEW = "view"


class CachePort(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class LocationError(RuntimeError):
    """Raised when the current location cannot take a new fragment."""


class Location:
    """The page address holding the share token in its fragment."""

    UNSAFE_SCHEMES = frozenset({"blob", "about"})

    def __init__(self, href: str = SHARE_BASE_URL) -> None:
        self.href = href

    @classmethod
    def from_link(cls, link: str | None, base_url: str = SHARE_BASE_URL) -> Location:
        """Accept a full share URL or a bare token."""
        if not link:
            return cls(base_url)
        if urlsplit(link).scheme:
            return cls(link)
        return cls(f"{urldefrag(base_url).url}#{link.lstrip('#')}")

    @property
    def base(self) -> str:
        return urldefrag(self.href).url

    @property
    def fragment(self) -> str:
        return urldefrag(self.href).fragment

    def supports_history(self) -> bool:
        scheme = urlsplit(self.href).scheme.lower()
        return bool(scheme) and scheme not in self.UNSAFE_SCHEMES

    def replace_fragment(self, token: str) -> None:
        if not self.supports_history():
            raise LocationError(f"cannot rewrite fragment of {self.href!r}")
        self.href = f"{self.base}#{token}"


class ExpiringFlag:
    """A boolean that reads False again once its deadline has passed."""

    def __init__(self, duration: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.duration = duration
        self._clock = clock
        self._deadline: float | None = None

    def set(self) -> None:
        """Raise the flag; setting it again restarts the window."""
        self._deadline = self._clock() + self.duration

    def clear(self) -> None:
        self._deadline = None

    @property
    def active(self) -> bool:
        if self._deadline is None:
            return False
        if self._clock() >= self._deadline:
            self._deadline = None
            return False
        return True


@dataclass(frozen=True)
class BootResult:
    data: AppData
    mode: Mode
    share_url: str
    source: str


class SyncController:
    """Decides where the configuration comes from and where it goes."""

    def __init__(
        self,
        cache: CachePort,
        location: Location,
        cache_key: str = CACHE_KEY,
        defaults: AppData = DEFAULT_APP_DATA,
    ) -> None:
        self.cache = cache
        self.location = location
        self.cache_key = cache_key
        self.defaults = defaults

    @property
    def environment_safe(self) -> bool:
        return self.location.supports_history()

    def bootstrap(self) -> BootResult:
        fragment = self.location.fragment
        if fragment:
            loaded = decode(fragment)
            if loaded is not None:
                logger.info("bootstrap source=link categories=%d", len(loaded.categories))
                return BootResult(loaded, Mode.VIEW, self.location.href, "link")
            logger.warning("bootstrap link fragment unusable, falling back to cache")

        cached = self.read_cache()
        if cached is not None:
            logger.info("bootstrap source=cache categories=%d", len(cached.categories))
            return BootResult(cached, Mode.EDIT, self.location.href, "cache")

        logger.info("bootstrap source=defaults")
        return BootResult(self.defaults, Mode.EDIT, self.location.href, "defaults")

    def read_cache(self) -> AppData | None:
        try:
            raw = self.cache.read(self.cache_key)
            if raw is None:
                return None
            return from_payload(json.loads(raw))
        except (sqlite3.Error, OSError, ValueError) as exc:
            logger.warning("cache_read_failed key=%s error=%r", self.cache_key, exc)
            return None

    def write_cache(self, data: AppData) -> None:
        try:
            self.cache.write(self.cache_key, dumps(data))
        except (sqlite3.Error, OSError, ValueError, TypeError) as exc:
            logger.warning("cache_write_failed key=%s error=%r", self.cache_key, exc)

    def sync(self, data: AppData, mode: Mode) -> str | None:
        """Persist an edited configuration and return its share URL.

        Returns None outside edit mode and "" when the configuration could
        not be encoded (sharing unavailable).
        """
        if mode is not Mode.EDIT:
            return None

        self.write_cache(data)
        token = encode(data)
        if not token:
            return ""
        share_url = f"{self.location.base}#{token}"
        if self.environment_safe:
            try:
                self.location.replace_fragment(token)
            except LocationError as exc:
                logger.warning("history_update_failed error=%r", exc)
        return share_url
