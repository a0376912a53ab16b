"""
Duration Policy

Converts application durations (fractional seconds) into the store's
millisecond expiration.
"""

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Optional

from ..core.exceptions import ContractViolationError

MILLISECONDS_PER_SECOND = 1000
MIN_TTL_MS = 1


class TtlMode(str, Enum):
    """How an entry expires in the store."""

    NONE = "none"
    EXPIRING = "expiring"


@dataclass(frozen=True)
class StoreTtl:
    """Expiration argument handed to the store."""

    mode: TtlMode
    milliseconds: Optional[int] = None

    @property
    def ttl_ms(self) -> Optional[int]:
        """Milliseconds for EXPIRING, None for entries that never expire."""
        return self.milliseconds if self.mode is TtlMode.EXPIRING else None


NO_EXPIRATION = StoreTtl(TtlMode.NONE)


def validate_duration(duration: float) -> float:
    """
    Check a duration in seconds.

    Args:
        duration: Seconds, 0 meaning "never expires"

    Returns:
        The duration as a float

    Raises:
        ContractViolationError: For negative, non-finite or non-numeric values
    """
    if isinstance(duration, bool) or not isinstance(duration, Real):
        raise ContractViolationError(
            f"Duration must be a number of seconds, got {type(duration).__name__}",
            field="duration",
            value=duration
        )

    seconds = float(duration)
    if math.isnan(seconds) or math.isinf(seconds):
        raise ContractViolationError(
            "Duration must be finite",
            field="duration",
            value=duration
        )
    if seconds < 0:
        raise ContractViolationError(
            f"Duration must not be negative: {duration}",
            field="duration",
            value=duration
        )
    return seconds


def to_store_ttl(duration: float) -> StoreTtl:
    """
    Convert seconds to the store's expiration argument.

    Positive durations are rounded to the nearest millisecond and never
    drop below 1 ms, since a 0 ms TTL would read as "no expiration".

    Examples:
        >>> to_store_ttl(0)
        StoreTtl(mode=<TtlMode.NONE: 'none'>, milliseconds=None)
        >>> to_store_ttl(0.1).milliseconds
        100
    """
    seconds = validate_duration(duration)
    if seconds == 0:
        return NO_EXPIRATION

    milliseconds = max(MIN_TTL_MS, round(seconds * MILLISECONDS_PER_SECOND))
    return StoreTtl(TtlMode.EXPIRING, milliseconds)
