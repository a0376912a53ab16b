"""
Core Protocol Definitions

This module defines the interfaces that all implementations must follow.
"""

from .store_protocol import CacheStore, PrefixDeletingStore
from .serializer_protocol import Serializer

__all__ = [
    "CacheStore",
    "PrefixDeletingStore",
    "Serializer",
]
