"""
Expiring Cache

Namespaced key-value cache with millisecond expiration, backed by Redis.
"""

__version__ = "1.0.0"

# Public API exports
from .application.services import Cache, CacheResult, MISS
from .core.config import CacheSettings, FlushScope, ConfigLoader
from .core.exceptions import (
    CacheError,
    ConfigurationError,
    TransportError,
    SerializationError,
    EncodeError,
    DecodeError,
    ContractViolationError,
)
from .core.protocols import CacheStore, PrefixDeletingStore, Serializer
from .domain import KeyCodec, JsonSerializer, PickleSerializer, to_store_ttl
from .infrastructure.stores import RedisStore, MemoryStore

__all__ = [
    "Cache",
    "CacheResult",
    "MISS",
    "CacheSettings",
    "FlushScope",
    "ConfigLoader",
    "CacheError",
    "ConfigurationError",
    "TransportError",
    "SerializationError",
    "EncodeError",
    "DecodeError",
    "ContractViolationError",
    "CacheStore",
    "PrefixDeletingStore",
    "Serializer",
    "KeyCodec",
    "JsonSerializer",
    "PickleSerializer",
    "to_store_ttl",
    "RedisStore",
    "MemoryStore",
]
