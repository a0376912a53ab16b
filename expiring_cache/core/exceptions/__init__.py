"""
Core Exceptions

Base exception classes for the cache layer.
"""

from .base import (
    CacheError,
    ConfigurationError,
    TransportError,
    SerializationError,
    EncodeError,
    DecodeError,
    ContractViolationError,
)

__all__ = [
    "CacheError",
    "ConfigurationError",
    "TransportError",
    "SerializationError",
    "EncodeError",
    "DecodeError",
    "ContractViolationError",
]
