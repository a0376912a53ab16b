"""
Redis Store Implementation

Concrete implementation of CacheStore using Redis.
"""

import logging
import re
from typing import Optional, Any, Awaitable, Callable, TypeVar

import redis.asyncio as aioredis
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError, TimeoutError as RedisTimeoutError

from ...core.exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCAN_BATCH_SIZE = 500
_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_glob(pattern: str) -> str:
    """Escape Redis glob metacharacters so the pattern matches literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", pattern)


class RedisStore:
    """Redis-backed store.

    Expiration uses ``SET ... PX``, conditional writes use ``SET ... NX``,
    so both are single atomic commands on the server.
    """

    name = "redis"

    def __init__(self, redis: Redis):
        """
        Initialize Redis store.

        Args:
            redis: Connected client created with ``decode_responses=False``
        """
        if redis is None:
            raise ConfigurationError(
                "RedisStore requires a Redis client",
                config_key="redis"
            )
        self.redis = redis

    @classmethod
    def from_url(
        cls,
        redis_url: str,
        socket_timeout: Optional[float] = None,
        **options: Any
    ) -> "RedisStore":
        """
        Create a store with a new client.

        Args:
            redis_url: Redis connection URL
            socket_timeout: Socket timeout in seconds
            **options: Extra keyword arguments for ``redis.asyncio.from_url``

        Returns:
            RedisStore instance
        """
        client = aioredis.from_url(
            redis_url,
            decode_responses=False,
            socket_timeout=socket_timeout,
            health_check_interval=30,
            **options
        )
        return cls(client)

    async def initialize(self) -> None:
        """Verify the connection."""
        await self._call("initialize", self.redis.ping)
        logger.info("Redis store initialized successfully")

    async def shutdown(self) -> None:
        """Close the Redis connection."""
        await self.redis.aclose()
        logger.info("Redis store shutdown")

    async def health_check(self) -> bool:
        """Check if Redis is reachable."""
        try:
            await self.redis.ping()
            return True
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return False

    async def get(self, key: str) -> Optional[bytes]:
        return await self._call("get", self.redis.get, key)

    async def set(
        self,
        key: str,
        value: bytes,
        ttl_ms: Optional[int] = None
    ) -> bool:
        result = await self._call("set", self.redis.set, key, value, px=ttl_ms)
        return bool(result)

    async def set_if_absent(
        self,
        key: str,
        value: bytes,
        ttl_ms: Optional[int] = None
    ) -> bool:
        # SET NX replies nil when the key already exists
        result = await self._call(
            "set_if_absent", self.redis.set, key, value, px=ttl_ms, nx=True
        )
        return bool(result)

    async def delete(self, key: str) -> int:
        return int(await self._call("delete", self.redis.delete, key))

    async def exists(self, key: str) -> bool:
        result = await self._call("exists", self.redis.exists, key)
        return result > 0

    async def flush_all(self) -> bool:
        result = await self._call("flush_all", self.redis.flushdb)
        return bool(result)

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every key under ``prefix`` using SCAN so the server is not blocked."""
        pattern = f"{escape_glob(prefix)}*"
        deleted = 0
        batch = []

        try:
            async for key in self.redis.scan_iter(match=pattern, count=SCAN_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= SCAN_BATCH_SIZE:
                    deleted += await self.redis.delete(*batch)
                    batch = []

            if batch:
                deleted += await self.redis.delete(*batch)

        except RedisError as e:
            raise self._transport_error("delete_prefix", e) from e

        logger.debug(f"Deleted {deleted} keys matching {pattern!r}")
        return deleted

    async def _call(
        self,
        operation: str,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any
    ) -> T:
        """Run one Redis command, converting client failures to TransportError."""
        try:
            return await func(*args, **kwargs)
        except RedisError as e:
            raise self._transport_error(operation, e) from e

    def _transport_error(self, operation: str, error: RedisError) -> TransportError:
        if isinstance(error, RedisTimeoutError):
            reason = "timed out"
        elif isinstance(error, RedisConnectionError):
            reason = "connection failed"
        else:
            reason = "command failed"

        logger.error(f"Redis {operation} {reason}: {error}")
        return TransportError(
            f"Redis {operation} {reason}: {error}",
            store_name=self.name,
            operation=operation,
            original_exception=error
        )

    def __repr__(self) -> str:
        return f"RedisStore(redis={self.redis!r})"
