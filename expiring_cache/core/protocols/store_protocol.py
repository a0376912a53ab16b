"""
Cache Store Protocol Definition

Defines the capability interface every key-value backend must offer.
"""

from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for key-value stores with native expiration and conditional writes.

    Implementations must perform ``set_if_absent`` as a single atomic
    operation on the store side.

    Namespace flushes additionally need ``delete_prefix``, see
    PrefixDeletingStore. A store without it can only back a cache that
    flushes the whole database.
    """

    async def get(self, key: str) -> Optional[bytes]:
        """
        Retrieve raw bytes for a key.

        Args:
            key: Store key

        Returns:
            Stored bytes, or None if the key is absent or expired
        """
        ...

    async def set(
        self,
        key: str,
        value: bytes,
        ttl_ms: Optional[int] = None
    ) -> bool:
        """
        Unconditionally store a value, replacing any value and expiration.

        Args:
            key: Store key
            value: Encoded value
            ttl_ms: Time to live in milliseconds, None to persist

        Returns:
            True if the store acknowledged the write
        """
        ...

    async def set_if_absent(
        self,
        key: str,
        value: bytes,
        ttl_ms: Optional[int] = None
    ) -> bool:
        """
        Store a value only if the key does not exist.

        Args:
            key: Store key
            value: Encoded value
            ttl_ms: Time to live in milliseconds, None to persist

        Returns:
            True if this call created the entry, False if it already existed
        """
        ...

    async def delete(self, key: str) -> int:
        """
        Delete a key.

        Returns:
            Number of keys removed
        """
        ...

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        ...

    async def flush_all(self) -> bool:
        """Remove every key of the underlying database."""
        ...


@runtime_checkable
class PrefixDeletingStore(Protocol):
    """Protocol for stores that can remove every key under a prefix."""

    async def delete_prefix(self, prefix: str) -> int:
        """
        Remove every key starting with ``prefix``.

        Args:
            prefix: Key prefix; an empty prefix matches every key

        Returns:
            Number of keys removed
        """
        ...
