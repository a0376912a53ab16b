"""
Memory Store Implementation

In-process store for testing and development.
"""

import logging
import time
from typing import Optional, Dict, Callable, Tuple

logger = logging.getLogger(__name__)


class MemoryStore:
    """Dict-backed store with millisecond expiration.

    No method awaits between reading and writing its table, so each
    operation is atomic with respect to other tasks on the same event loop.
    Not safe for use from several threads.
    """

    name = "memory"

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize memory store.

        Args:
            clock: Monotonic clock returning seconds
        """
        self._clock = clock
        # key -> (value, expires_at in seconds or None)
        self._entries: Dict[str, Tuple[bytes, Optional[float]]] = {}
        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "deletes": 0
        }

    async def initialize(self) -> None:
        logger.info("Memory store initialized")

    async def shutdown(self) -> None:
        self._entries.clear()
        logger.info("Memory store shutdown")

    async def health_check(self) -> bool:
        return True

    async def get(self, key: str) -> Optional[bytes]:
        entry = self._live_entry(key)
        if entry is None:
            self._stats["misses"] += 1
            return None

        self._stats["hits"] += 1
        return entry[0]

    async def set(
        self,
        key: str,
        value: bytes,
        ttl_ms: Optional[int] = None
    ) -> bool:
        self._entries[key] = (value, self._expires_at(ttl_ms))
        self._stats["sets"] += 1
        return True

    async def set_if_absent(
        self,
        key: str,
        value: bytes,
        ttl_ms: Optional[int] = None
    ) -> bool:
        if self._live_entry(key) is not None:
            return False

        self._entries[key] = (value, self._expires_at(ttl_ms))
        self._stats["sets"] += 1
        return True

    async def delete(self, key: str) -> int:
        if self._live_entry(key) is None:
            return 0

        del self._entries[key]
        self._stats["deletes"] += 1
        return 1

    async def exists(self, key: str) -> bool:
        return self._live_entry(key) is not None

    async def flush_all(self) -> bool:
        self._entries.clear()
        return True

    async def delete_prefix(self, prefix: str) -> int:
        self._purge_expired()
        keys_to_delete = [k for k in self._entries if k.startswith(prefix)]

        for key in keys_to_delete:
            del self._entries[key]

        return len(keys_to_delete)

    async def get_ttl_ms(self, key: str) -> Optional[int]:
        """Remaining time to live in milliseconds, None if absent or persistent."""
        entry = self._live_entry(key)
        if entry is None or entry[1] is None:
            return None
        return max(0, round((entry[1] - self._clock()) * 1000))

    def get_stats(self) -> dict:
        """Get store statistics."""
        total = self._stats["hits"] + self._stats["misses"]
        hit_rate = (
            (self._stats["hits"] / total * 100) if total > 0 else 0.0
        )

        return {
            "type": "memory",
            "size": len(self._entries),
            "hits": self._stats["hits"],
            "misses": self._stats["misses"],
            "sets": self._stats["sets"],
            "deletes": self._stats["deletes"],
            "hit_rate": hit_rate
        }

    def _expires_at(self, ttl_ms: Optional[int]) -> Optional[float]:
        if ttl_ms is None:
            return None
        return self._clock() + ttl_ms / 1000

    def _live_entry(self, key: str) -> Optional[Tuple[bytes, Optional[float]]]:
        """Return the entry for key, dropping it first if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at = entry[1]
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None

        return entry

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [
            k for k, (_, expires_at) in self._entries.items()
            if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self._entries[key]
