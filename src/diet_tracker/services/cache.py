"""Expiring cache for OpenFoodFacts product lookups.

Keys are ``off:product:<barcode>``; values are normalized ``ProductNutrition``
records. Only hits are cached, so a product added upstream later is still
picked up on the next scan.
"""

import time
from typing import Protocol


class Cache(Protocol):
    """Key-value store for looked-up products."""

    def get(self, key: str) -> object | None:
        """Return the cached product, or None when missing or expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Remember a product for ``ttl_seconds``."""


class InMemoryCache(Cache):
    """Process-local product cache on a monotonic clock."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[float, object]] = {}

    def get(self, key: str) -> object | None:
        expires_at, value = self._entries.get(key, (0.0, None))
        if value is not None and time.monotonic() < expires_at:
            return value
        self._entries.pop(key, None)
        return None

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self._entries[key] = (time.monotonic() + ttl_seconds, value)

    def clear(self) -> None:
        """Forget every product."""
        self._entries.clear()
