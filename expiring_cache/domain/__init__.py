"""
Domain

Key, value and duration handling shared by every cache operation.
"""

from .keys import CacheKey, KeyCodec
from .values import JsonSerializer, PickleSerializer, get_serializer
from .duration import StoreTtl, TtlMode, to_store_ttl, validate_duration

__all__ = [
    "CacheKey",
    "KeyCodec",
    "JsonSerializer",
    "PickleSerializer",
    "get_serializer",
    "StoreTtl",
    "TtlMode",
    "to_store_ttl",
    "validate_duration",
]
