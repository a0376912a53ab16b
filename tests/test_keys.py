"""
Tests for store key normalization.
"""

from __future__ import annotations

import re

import pytest

from expiring_cache.core.exceptions import ContractViolationError
from expiring_cache.domain.keys import DIGEST_LENGTH, KeyCodec, canonical_bytes

HEX_DIGEST = re.compile(r"[0-9a-f]{32}")


@pytest.fixture
def codec() -> KeyCodec:
    return KeyCodec("app:")


class TestRawKeys:
    """Short alphanumeric strings skip hashing."""

    def test_short_alphanumeric_key_is_kept(self, codec: KeyCodec) -> None:
        """Test that a short alphanumeric key is only prefixed."""
        assert codec.build("user1") == "app:user1"

    def test_empty_prefix(self) -> None:
        """Test that no prefix leaves the key untouched."""
        assert KeyCodec().build("abc") == "abc"

    def test_key_with_separator_is_hashed(self, codec: KeyCodec) -> None:
        """Test that non-alphanumeric keys are hashed."""
        store_key = codec.build("user:1")

        assert store_key.startswith("app:")
        assert HEX_DIGEST.fullmatch(store_key[len("app:"):])

    def test_key_of_digest_length_is_hashed(self, codec: KeyCodec) -> None:
        """Test that a raw key can never collide with a digest."""
        lookalike = codec.normalize(["some", "key"])
        assert len(lookalike) == DIGEST_LENGTH

        assert codec.normalize(lookalike) != lookalike

    def test_empty_string_is_hashed(self, codec: KeyCodec) -> None:
        """Test that the empty string still produces a non-empty key."""
        assert HEX_DIGEST.fullmatch(codec.normalize(""))


class TestCompositeKeys:
    """Composite keys normalize canonically."""

    def test_same_key_same_output(self, codec: KeyCodec) -> None:
        """Test that normalization is deterministic."""
        key = {"user": 42, "fields": ["name", "email"]}
        assert codec.build(key) == codec.build(dict(key))

    def test_mapping_order_does_not_matter(self, codec: KeyCodec) -> None:
        """Test that mappings with the same items give the same key."""
        assert codec.build({"a": 1, "b": 2}) == codec.build({"b": 2, "a": 1})

    def test_tuple_and_list_are_equivalent(self, codec: KeyCodec) -> None:
        """Test that tuples and lists with the same items match."""
        assert codec.build(("report", 7)) == codec.build(["report", 7])

    def test_integral_float_matches_int(self, codec: KeyCodec) -> None:
        """Test that 1.0 and 1 map to the same key, as they compare equal."""
        assert codec.build(["page", 1.0]) == codec.build(["page", 1])

    def test_distinct_keys_differ(self, codec: KeyCodec) -> None:
        """Test that different keys give different store keys."""
        keys = [
            1,
            "1",
            True,
            None,
            1.5,
            ["a", "b"],
            ["b", "a"],
            {"a": 1},
            {"a": [1]},
            [["a", 1]],
            {1: "x"},
            {"1": "x"},
            {True: "x"},
            {"True": "x"},
            {None: "x"},
            {"null": "x"},
            [],
            {},
        ]
        store_keys = {codec.build(key) for key in keys}

        assert len(store_keys) == len(keys)

    def test_store_key_length_is_bounded(self, codec: KeyCodec) -> None:
        """Test that huge keys still produce fixed-length store keys."""
        huge_key = {"items": list(range(10_000)), "name": "x" * 5000}

        assert len(codec.build(huge_key)) == len("app:") + DIGEST_LENGTH

    def test_prefix_separates_namespaces(self) -> None:
        """Test that the same key under different prefixes differs."""
        key = ["user", 1]
        assert KeyCodec("a:").build(key) != KeyCodec("b:").build(key)

    def test_canonical_bytes_are_sorted_and_compact(self) -> None:
        """Test the canonical serialized form."""
        assert canonical_bytes({"b": 1, "a": (2, 3)}) == (
            b'{"__map__":[["a",[2,3]],["b",1]]}'
        )

    def test_mapping_keys_keep_their_type(self, codec: KeyCodec) -> None:
        """Test that an int mapping key is not confused with its string form."""
        assert codec.build({1: "x"}) != codec.build({"1": "x"})
        assert codec.build({True: "x"}) != codec.build({1: "x"})

    def test_mixed_mapping_keys_are_all_kept(self, codec: KeyCodec) -> None:
        """Test that keys with the same string form do not shadow each other."""
        assert codec.build({1: "a", "1": "b"}) != codec.build({"1": "b"})
        assert codec.build({1: "a", "1": "b"}) != codec.build({1: "a"})

    def test_mixed_mapping_keys_order_does_not_matter(self, codec: KeyCodec) -> None:
        """Test that mixed-type mapping keys still normalize stably."""
        assert codec.build({1: "a", "1": "b"}) == codec.build({"1": "b", 1: "a"})


class TestUnsupportedKeys:
    """Keys that cannot be normalized are rejected."""

    def test_arbitrary_object_raises(self, codec: KeyCodec) -> None:
        """Test that an arbitrary object is a contract violation."""
        with pytest.raises(ContractViolationError):
            codec.build(object())

    def test_nested_object_raises(self, codec: KeyCodec) -> None:
        """Test that unsupported values nested in a key are rejected."""
        with pytest.raises(ContractViolationError):
            codec.build(["user", {1, 2}])
