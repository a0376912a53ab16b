"""
Application Services

Cache operations exposed to the hosting application.
"""

from .cache import Cache, CacheResult, MISS

__all__ = [
    "Cache",
    "CacheResult",
    "MISS",
]
