"""
Value Codecs

Serializers turning application values into the bytes kept by the store.
"""

import json
import pickle
from typing import Any

from ..core.exceptions import ConfigurationError, EncodeError, DecodeError


class JsonSerializer:
    """UTF-8 JSON codec.

    Round-trips None, booleans, numbers, strings, lists and dicts with
    string keys. Tuples come back as lists.
    """

    name = "json"

    def encode(self, value: Any) -> bytes:
        try:
            return json.dumps(
                value,
                ensure_ascii=False,
                separators=(",", ":")
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodeError(
                f"Value is not JSON serializable: {e}",
                serializer=self.name,
                original_exception=e
            ) from e

    def decode(self, data: bytes) -> Any:
        try:
            if isinstance(data, (bytes, bytearray)):
                data = data.decode("utf-8")
            return json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError, TypeError) as e:
            raise DecodeError(
                f"Stored data is not valid JSON: {e}",
                serializer=self.name,
                original_exception=e
            ) from e


class PickleSerializer:
    """Pickle codec for arbitrary Python objects.

    Only use against a store no untrusted party can write to.
    """

    name = "pickle"

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def encode(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise EncodeError(
                f"Value cannot be pickled: {e}",
                serializer=self.name,
                original_exception=e
            ) from e

    def decode(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)
        except (
            pickle.UnpicklingError,
            EOFError,
            AttributeError,
            ImportError,
            IndexError,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            raise DecodeError(
                f"Stored data is not a valid pickle: {e}",
                serializer=self.name,
                original_exception=e
            ) from e


SERIALIZERS = {
    JsonSerializer.name: JsonSerializer,
    PickleSerializer.name: PickleSerializer,
}


def get_serializer(name: str):
    """
    Create a serializer by its configured name.

    Args:
        name: "json" or "pickle"

    Returns:
        Serializer instance
    """
    try:
        return SERIALIZERS[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown serializer: {name}. Must be one of {sorted(SERIALIZERS)}",
            config_key="serializer"
        ) from None
