"""
Store Infrastructure

Concrete key-value store implementations.
"""

from .redis_store import RedisStore
from .memory_store import MemoryStore

__all__ = [
    "RedisStore",
    "MemoryStore",
]
