"""
Pytest configuration and fixtures for cache tests.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import AsyncMock

import pytest

from expiring_cache.application.services.cache import Cache
from expiring_cache.core import container as di
from expiring_cache.core.config import ConfigLoader
from expiring_cache.infrastructure.stores import MemoryStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryStore:
    """Provide an empty in-memory store driven by the fake clock."""
    return MemoryStore(clock=clock)


@pytest.fixture
def cache(memory_store: MemoryStore) -> Cache:
    """Provide a cache under the ``app:`` prefix."""
    return Cache(memory_store, key_prefix="app:")


@pytest.fixture
def spy_store() -> MemoryStore:
    """Provide a real in-memory store whose methods record their calls."""
    store = MemoryStore()
    for name in (
        "get",
        "set",
        "set_if_absent",
        "delete",
        "exists",
        "flush_all",
        "delete_prefix",
    ):
        setattr(store, name, AsyncMock(wraps=getattr(store, name)))
    return store


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset loaded settings and the global container around each test."""
    ConfigLoader.reset()
    di.set_container(None)
    yield
    ConfigLoader.reset()
    di.set_container(None)
