"""
Serializer Protocol Definition

Defines the value codec interface used by the cache.
"""

from typing import Protocol, Any, runtime_checkable


@runtime_checkable
class Serializer(Protocol):
    """Protocol for value codecs."""

    name: str

    def encode(self, value: Any) -> bytes:
        """Encode a value for storage. Raises EncodeError on failure."""
        ...

    def decode(self, data: bytes) -> Any:
        """Decode stored bytes. Raises DecodeError on corrupt input."""
        ...
