"""
Bounded, TTL-expiring cache for chat responses.
"""

import json
import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Hashable, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


def make_cache_key(
    message: str,
    broker_id: Optional[str],
    client_id: Optional[str],
    selected_property_ids: Optional[Iterable[str]] = None
) -> str:
    """
    Build the cache key for a chat message.

    The message is trimmed and lowercased, and the selected ids are sorted,
    so that the same question about the same properties hits the cache.
    """
    parts = [
        (message or "").strip().lower(),
        broker_id or "",
        client_id or "",
        sorted(selected_property_ids or []),
    ]
    return json.dumps(parts, separators=(",", ":"))


class ResponseCache:
    """
    In-memory cache with a fixed capacity and a per-entry time to live.

    Expired entries are dropped when they are read. When the cache is full
    the oldest insertion is evicted.
    """

    def __init__(
        self,
        max_entries: int = 128,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[Hashable, Tuple[float, Any]]" = OrderedDict()

    def get(self, key: Hashable) -> Optional[Any]:
        """
        Return the cached value, or None on a miss or an expired entry.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug("Cache entry expired")
            return None

        return value

    def set(self, key: Hashable, value: Any):
        """Store a value, evicting the oldest entry if the cache is full."""
        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self._max_entries:
            self._entries.popitem(last=False)

        self._entries[key] = (self._clock() + self._ttl, value)

    def purge_expired(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self):
        self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
