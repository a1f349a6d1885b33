"""In-memory result cache with TTL expiry and FIFO capacity eviction.

All operations are synchronous, so on a single event loop they never
interleave with each other and no locking is needed.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .models import (
    DEFAULT_CACHE_DURATION_MS,
    DEFAULT_MAX_CACHE_SIZE,
    CacheEntry,
    CacheStats,
    CompositeResult,
)
from .urls import normalize_url

logger = logging.getLogger(__name__)


def fingerprint(url: str) -> str:
    """Deterministic cache key for a URL: 32-bit rolling hash, hex, prefixed ``eco_``."""
    normalized = normalize_url(url).lower()
    h = 0
    for char in normalized:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return f"eco_{abs(h):x}"


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class ResultCache:
    """Bounded, time-expiring store of composite results keyed by fingerprint."""

    def __init__(
        self,
        duration_ms: int = DEFAULT_CACHE_DURATION_MS,
        max_size: int = DEFAULT_MAX_CACHE_SIZE,
        clock: Callable[[], float] = _monotonic_ms,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._duration_ms = duration_ms
        self._max_size = max_size
        self._clock = clock
        # dict preserves insertion order, which gives FIFO eviction
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[CompositeResult]:
        """Return the live value for ``key``, or None if absent or expired.

        Expired entries are left in place; ``sweep`` removes them.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self._duration_ms:
            return None
        return entry.value

    def put(self, key: str, value: CompositeResult) -> None:
        # Re-storing a key counts as a fresh insertion
        self._entries.pop(key, None)
        if len(self._entries) >= self._max_size:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Cache full (%d), evicted %s", self._max_size, oldest)
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def sweep(self) -> int:
        """Remove every expired entry. Returns how many were removed."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if now - e.stored_at >= self._duration_ms]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info("Cache sweep removed %d expired entries", len(expired))
        return len(expired)

    def clear(self) -> int:
        size = len(self._entries)
        self._entries.clear()
        return size

    def stats(self) -> CacheStats:
        return CacheStats(size=len(self._entries), duration=self._duration_ms, max_size=self._max_size)
