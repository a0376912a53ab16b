"""
Cache Service

Composes key normalization, value serialization and duration conversion
on top of a CacheStore.
"""

import inspect
import logging
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)

from ...core.config import CacheSettings, FlushScope
from ...core.exceptions import ConfigurationError
from ...core.protocols import CacheStore, PrefixDeletingStore, Serializer
from ...domain.duration import StoreTtl, to_store_ttl
from ...domain.keys import CacheKey, KeyCodec
from ...domain.values import JsonSerializer, get_serializer

logger = logging.getLogger(__name__)

Items = Union[Mapping[Any, Any], Iterable[Tuple[CacheKey, Any]]]


class CacheResult(NamedTuple):
    """Outcome of a read: the value and whether the key was present."""

    value: Any = None
    found: bool = False


MISS = CacheResult()


class Cache:
    """
    Cache bound to a single store.

    Holds no mutable state besides references fixed at construction, so one
    instance can serve concurrent tasks. Every operation is one store round
    trip; store failures propagate as TransportError and are never retried
    here.

    Durations are seconds and may be fractional (0.1 is 100 ms). A duration
    of 0 stores the entry without expiration; None falls back to
    ``default_duration``.
    """

    def __init__(
        self,
        store: CacheStore,
        key_prefix: str = "",
        serializer: Optional[Serializer] = None,
        default_duration: float = 0,
        flush_scope: FlushScope = FlushScope.NAMESPACE
    ):
        """
        Initialize the cache.

        Args:
            store: Backend implementing CacheStore
            key_prefix: Namespace prepended to every store key
            serializer: Value codec, JSON by default
            default_duration: Seconds used when an operation passes no duration
            flush_scope: Whether flush() clears the prefix or the whole database

        Raises:
            ConfigurationError: If the store is missing, does not implement
                CacheStore, or cannot delete by prefix under a namespace flush scope
        """
        if store is None:
            raise ConfigurationError("Cache requires a store", config_key="store")
        if not isinstance(store, CacheStore):
            raise ConfigurationError(
                f"{type(store).__name__} does not implement CacheStore",
                config_key="store"
            )

        flush_scope = FlushScope(flush_scope)
        if flush_scope is FlushScope.NAMESPACE and not isinstance(store, PrefixDeletingStore):
            raise ConfigurationError(
                f"{type(store).__name__} cannot delete by prefix; "
                "use flush_scope='database'",
                config_key="flush_scope"
            )

        self.store = store
        self.keys = KeyCodec(key_prefix)
        self.serializer = serializer or JsonSerializer()
        self.flush_scope = flush_scope
        self.default_duration = default_duration
        # Converted once; an invalid default fails here
        self._default_ttl = to_store_ttl(default_duration)

    @classmethod
    def from_settings(cls, store: CacheStore, settings: CacheSettings) -> "Cache":
        """Create a cache configured from CacheSettings."""
        return cls(
            store,
            key_prefix=settings.key_prefix,
            serializer=get_serializer(settings.serializer),
            default_duration=settings.default_duration,
            flush_scope=settings.flush_scope
        )

    @property
    def key_prefix(self) -> str:
        return self.keys.prefix

    def build_key(self, key: CacheKey) -> str:
        """Normalize an application key into its store key."""
        return self.keys.build(key)

    async def get(self, key: CacheKey) -> CacheResult:
        """
        Retrieve a value.

        Args:
            key: Application key

        Returns:
            CacheResult(value, True) on a hit, CacheResult(None, False) on a miss

        Raises:
            DecodeError: If the stored bytes cannot be decoded
        """
        store_key = self.build_key(key)
        data = await self.store.get(store_key)

        if data is None:
            logger.debug(f"Cache miss for key: {store_key}")
            return MISS

        logger.debug(f"Cache hit for key: {store_key}")
        return CacheResult(self.serializer.decode(data), True)

    async def exists(self, key: CacheKey) -> bool:
        """
        Check whether a key is present without reading its value.

        A later get() may still miss if the entry expires or is deleted
        in between.
        """
        return bool(await self.store.exists(self.build_key(key)))

    async def set(
        self,
        key: CacheKey,
        value: Any,
        duration: Optional[float] = None
    ) -> bool:
        """
        Store a value, replacing any existing value and expiration.

        Args:
            key: Application key
            value: Value to cache
            duration: Seconds to live, 0 for no expiration

        Returns:
            True if the store acknowledged the write

        Raises:
            ContractViolationError: If duration is negative
            EncodeError: If the value cannot be serialized
        """
        ttl = self._resolve_ttl(duration)
        store_key = self.build_key(key)
        data = self.serializer.encode(value)

        stored = await self.store.set(store_key, data, ttl_ms=ttl.ttl_ms)
        logger.debug(f"Cache set for key: {store_key} (TTL: {ttl.ttl_ms}ms)")
        return bool(stored)

    async def add(
        self,
        key: CacheKey,
        value: Any,
        duration: Optional[float] = None
    ) -> bool:
        """
        Store a value only if the key is absent.

        Uses the store's atomic set-if-absent, so of several concurrent
        add() calls for one key exactly one succeeds.

        Returns:
            True if this call created the entry, False if it already existed
        """
        ttl = self._resolve_ttl(duration)
        store_key = self.build_key(key)
        data = self.serializer.encode(value)

        added = bool(await self.store.set_if_absent(store_key, data, ttl_ms=ttl.ttl_ms))
        logger.debug(f"Cache add for key: {store_key} (added: {added})")
        return added

    async def delete(self, key: CacheKey) -> bool:
        """
        Delete a value.

        Returns:
            True if an entry was removed
        """
        store_key = self.build_key(key)
        removed = await self.store.delete(store_key)
        logger.debug(f"Cache delete for key: {store_key} (removed: {removed})")
        return removed > 0

    async def flush(self) -> bool:
        """
        Remove cached entries.

        With FlushScope.NAMESPACE only keys under the key prefix are removed
        (every key when the prefix is empty). With FlushScope.DATABASE the
        whole store database is cleared, including data the cache did not
        write.
        """
        if self.flush_scope is FlushScope.DATABASE:
            logger.warning("Flushing the entire store database")
            return bool(await self.store.flush_all())

        removed = await self.store.delete_prefix(self.key_prefix)
        logger.info(f"Flushed {removed} keys under prefix {self.key_prefix!r}")
        return True

    async def multi_get(self, keys: Iterable[CacheKey]) -> List[CacheResult]:
        """
        Retrieve several values.

        Returns:
            One CacheResult per key, in the order given
        """
        return [await self.get(key) for key in keys]

    async def multi_set(
        self,
        items: Items,
        duration: Optional[float] = None
    ) -> List[CacheKey]:
        """
        Store several values.

        Args:
            items: Mapping or iterable of (key, value) pairs
            duration: Seconds to live for every entry

        Returns:
            Keys whose write was not acknowledged
        """
        self._resolve_ttl(duration)
        failed = []
        for key, value in self._pairs(items):
            if not await self.set(key, value, duration):
                failed.append(key)
        return failed

    async def multi_add(
        self,
        items: Items,
        duration: Optional[float] = None
    ) -> List[CacheKey]:
        """
        Store several values, each only if its key is absent.

        Returns:
            Keys that already existed and were left untouched
        """
        self._resolve_ttl(duration)
        existing = []
        for key, value in self._pairs(items):
            if not await self.add(key, value, duration):
                existing.append(key)
        return existing

    async def get_or_set(
        self,
        key: CacheKey,
        factory: Callable[[], Union[Any, Awaitable[Any]]],
        duration: Optional[float] = None
    ) -> Any:
        """
        Return the cached value, computing and storing it on a miss.

        Args:
            key: Application key
            factory: Callable (sync or async) producing the value
            duration: Seconds to live for a newly stored value

        Returns:
            Cached or freshly produced value
        """
        self._resolve_ttl(duration)
        cached = await self.get(key)
        if cached.found:
            return cached.value

        value = factory()
        if inspect.isawaitable(value):
            value = await value

        if not await self.set(key, value, duration):
            logger.warning(f"Failed to store computed value for key: {self.build_key(key)}")
        return value

    def _resolve_ttl(self, duration: Optional[float]) -> StoreTtl:
        if duration is None:
            return self._default_ttl
        return to_store_ttl(duration)

    @staticmethod
    def _pairs(items: Items) -> Iterable[Tuple[CacheKey, Any]]:
        if isinstance(items, Mapping):
            return items.items()
        return items

    def __repr__(self) -> str:
        return (
            f"Cache(store={self.store!r}, key_prefix={self.key_prefix!r}, "
            f"serializer={self.serializer.name!r}, flush_scope={self.flush_scope.value!r})"
        )
