"""
Key Codec

Normalizes application cache keys into store keys.

Short alphanumeric strings are kept as-is; everything else is reduced to a
fixed-length digest of its canonical JSON form.
"""

import hashlib
import json
import re
from typing import Any, Mapping, Sequence, Union

from ..core.exceptions import ContractViolationError

# Application keys: primitives, or sequences/mappings of them, recursively
Primitive = Union[str, int, float, bool, None]
CacheKey = Union[Primitive, Sequence[Any], Mapping[Any, Any]]

DIGEST_LENGTH = 32
_RAW_KEY_PATTERN = re.compile(r"[A-Za-z0-9]+")


# Tag for canonicalized mappings; keeps {"a": 1} apart from [["a", 1]]
MAPPING_TAG = "__map__"


def _dumps(obj: Any) -> str:
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=True
    )


def canonicalize(key: Any) -> Any:
    """
    Convert a key into a JSON-ready structure with a stable shape.

    Tuples and lists both become lists and integral floats become ints.
    A mapping becomes ``{"__map__": [[key, value], ...]}`` with its items
    canonicalized and sorted by the JSON form of each key, so mapping keys
    keep their type: ``{1: "x"}`` and ``{"1": "x"}`` stay distinct.

    Raises:
        ContractViolationError: If the key holds an unsupported type
    """
    if isinstance(key, float) and key.is_integer():
        # 1.0 == 1, so both must map to the same store key
        return int(key)

    if key is None or isinstance(key, (str, bool, int, float)):
        return key

    if isinstance(key, Mapping):
        items = [[canonicalize(k), canonicalize(v)] for k, v in key.items()]
        items.sort(key=lambda item: _dumps(item[0]))
        return {MAPPING_TAG: items}

    if isinstance(key, (list, tuple)):
        return [canonicalize(item) for item in key]

    raise ContractViolationError(
        f"Unsupported cache key type: {type(key).__name__}",
        field="key",
        value=repr(key)
    )


def canonical_bytes(key: CacheKey) -> bytes:
    """Serialize a key into its canonical byte form."""
    return _dumps(canonicalize(key)).encode("utf-8")


def is_raw_key(key: Any) -> bool:
    """Whether a key can be stored without hashing."""
    return (
        isinstance(key, str)
        and len(key) < DIGEST_LENGTH
        and _RAW_KEY_PATTERN.fullmatch(key) is not None
    )


class KeyCodec:
    """Builds store keys under a fixed prefix."""

    def __init__(self, prefix: str = ""):
        """
        Initialize the key codec.

        Args:
            prefix: Namespace prepended to every store key
        """
        self.prefix = prefix

    def normalize(self, key: CacheKey) -> str:
        """Normalize a key without the prefix."""
        if is_raw_key(key):
            return key
        return hashlib.md5(canonical_bytes(key), usedforsecurity=False).hexdigest()

    def build(self, key: CacheKey) -> str:
        """
        Build the store key for an application key.

        Args:
            key: Application key

        Returns:
            ``prefix + normalized key``

        Example:
            >>> KeyCodec("app:").build("user1")
            'app:user1'
        """
        return f"{self.prefix}{self.normalize(key)}"

    def __repr__(self) -> str:
        return f"KeyCodec(prefix={self.prefix!r})"
