"""
Tests for duration conversion.
"""

from __future__ import annotations

from fractions import Fraction

import pytest

from expiring_cache.core.exceptions import ContractViolationError
from expiring_cache.domain.duration import (
    NO_EXPIRATION,
    StoreTtl,
    TtlMode,
    to_store_ttl,
)


class TestToStoreTtl:
    """Tests for to_store_ttl."""

    def test_zero_means_no_expiration(self) -> None:
        """Test that 0 produces no TTL argument."""
        ttl = to_store_ttl(0)

        assert ttl == NO_EXPIRATION
        assert ttl.mode is TtlMode.NONE
        assert ttl.ttl_ms is None

    def test_zero_float_means_no_expiration(self) -> None:
        """Test that 0.0 is treated like 0."""
        assert to_store_ttl(0.0).ttl_ms is None

    @pytest.mark.parametrize(
        ("seconds", "expected_ms"),
        [
            (1, 1000),
            (0.1, 100),
            (2.5, 2500),
            (0.0016, 2),
            (3600, 3_600_000),
            (Fraction(1, 8), 125),
        ],
    )
    def test_positive_durations_convert_to_milliseconds(
        self, seconds: float, expected_ms: int
    ) -> None:
        """Test conversion to the nearest millisecond."""
        assert to_store_ttl(seconds) == StoreTtl(TtlMode.EXPIRING, expected_ms)

    @pytest.mark.parametrize("seconds", [0.0001, 0.0004, 1e-9])
    def test_tiny_durations_never_round_to_zero(self, seconds: float) -> None:
        """Test that positive durations keep at least 1 ms."""
        assert to_store_ttl(seconds).ttl_ms == 1

    @pytest.mark.parametrize("seconds", [-1, -0.001, float("-inf")])
    def test_negative_durations_are_rejected(self, seconds: float) -> None:
        """Test that negative durations raise."""
        with pytest.raises(ContractViolationError) as exc_info:
            to_store_ttl(seconds)

        assert exc_info.value.field == "duration"

    @pytest.mark.parametrize("seconds", [float("nan"), float("inf")])
    def test_non_finite_durations_are_rejected(self, seconds: float) -> None:
        """Test that NaN and infinity raise."""
        with pytest.raises(ContractViolationError):
            to_store_ttl(seconds)

    @pytest.mark.parametrize("seconds", ["5", None, True, [1]])
    def test_non_numeric_durations_are_rejected(self, seconds: object) -> None:
        """Test that non-numbers, including booleans, raise."""
        with pytest.raises(ContractViolationError):
            to_store_ttl(seconds)  # type: ignore[arg-type]
