"""
Base Exception Classes

Core exception hierarchy for the cache layer.
"""

from typing import Optional, Dict, Any


class CacheError(Exception):
    """Base exception for all cache errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.details = details or {}
        self.original_exception = original_exception
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(CacheError):
    """Configuration-related errors (missing store, invalid settings)."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.config_key = config_key

        # Add to details
        self.details["config_key"] = config_key


class TransportError(CacheError):
    """Connection or timeout failure while talking to the store."""

    def __init__(
        self,
        message: str,
        store_name: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message, details, original_exception)
        self.store_name = store_name
        self.operation = operation

        # Add to details
        self.details["store_name"] = store_name
        self.details["operation"] = operation


class SerializationError(CacheError):
    """Value codec failure."""

    def __init__(
        self,
        message: str,
        serializer: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message, details, original_exception)
        self.serializer = serializer

        self.details["serializer"] = serializer


class EncodeError(SerializationError):
    """A value could not be encoded for storage."""
    pass


class DecodeError(SerializationError):
    """Stored bytes are corrupt or were not produced by this serializer."""
    pass


class ContractViolationError(CacheError):
    """Caller passed an argument the cache refuses to act on."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value

        # Add to details
        self.details["field"] = field
        self.details["value"] = value
