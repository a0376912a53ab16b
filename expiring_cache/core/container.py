"""
Dependency Injection Container

Composition root that builds the store and hands it to the cache.
"""

import logging
from typing import Optional

import redis.asyncio as aioredis
from dependency_injector import containers, providers

from .config import CacheSettings, ConfigLoader
from ..application.services.cache import Cache
from ..infrastructure.stores import RedisStore, MemoryStore
from ..utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


class Container(containers.DeclarativeContainer):
    """Main DI container for the cache."""

    # Load settings
    settings = providers.Singleton(
        ConfigLoader.load_config
    )

    # Infrastructure - Redis client, raw bytes in and out
    redis_client = providers.Singleton(
        aioredis.from_url,
        settings.provided.redis_url,
        decode_responses=False,
        socket_timeout=settings.provided.socket_timeout,
        health_check_interval=30,
    )

    # Infrastructure - Store
    store = providers.Singleton(
        RedisStore,
        redis=redis_client,
    )

    # Application - Cache, with the store injected through its constructor
    cache = providers.Singleton(
        Cache.from_settings,
        store=store,
        settings=settings,
    )


class TestContainer(Container):
    """Test container with in-memory dependencies."""

    settings = providers.Singleton(
        CacheSettings,
        _env_file=None,
        key_prefix="test:",
    )

    store = providers.Singleton(
        MemoryStore
    )

    cache = providers.Singleton(
        Cache.from_settings,
        store=store,
        settings=settings,
    )


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Optional[Container]) -> None:
    """Set the global container instance."""
    global _container
    _container = container


async def initialize_container(test_mode: bool = False) -> Container:
    """
    Initialize the container, connect the store and check its health.

    Args:
        test_mode: Whether to use the in-memory store

    Returns:
        Initialized container

    Raises:
        TransportError: If the store cannot be reached
    """
    container = TestContainer() if test_mode else Container()

    settings = container.settings()
    setup_logging(settings.log_level)

    store = container.store()
    await store.initialize()

    healthy = await store.health_check()
    if healthy:
        logger.info(f"Store health check passed: {store.name}")
    else:
        logger.warning(f"Store health check failed: {store.name}")

    set_container(container)

    logger.info(
        f"Container initialized in {'test' if test_mode else 'production'} mode"
    )

    return container


async def shutdown_container() -> None:
    """Shutdown the container and close the store."""
    if _container is None:
        return

    store = _container.store()
    await store.shutdown()

    set_container(None)

    logger.info("Container shutdown complete")
