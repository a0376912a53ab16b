"""
Configuration Management

Centralized configuration for the cache.
"""

from .settings import CacheSettings, FlushScope
from .loader import ConfigLoader, get_settings

__all__ = [
    "CacheSettings",
    "FlushScope",
    "ConfigLoader",
    "get_settings",
]
