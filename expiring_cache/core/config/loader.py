"""
Configuration Loader

Handles loading and validation of configuration.
"""

import logging
from typing import Optional, Dict, Any

from dotenv import load_dotenv
from pydantic import ValidationError

from .settings import CacheSettings
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and manages cache configuration."""

    _instance: Optional['ConfigLoader'] = None
    _settings: Optional[CacheSettings] = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def load_config(
        cls,
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> CacheSettings:
        """
        Load configuration from environment and files.

        Args:
            env_file: Path to .env file whose values are exported first
            overrides: Dictionary of field overrides

        Returns:
            Loaded settings

        Raises:
            ConfigurationError: If the settings fail validation
        """
        if cls._settings is not None:
            return cls._settings

        if env_file:
            load_dotenv(env_file)

        try:
            cls._settings = CacheSettings(**(overrides or {}))
        except ValidationError as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(
                f"Invalid cache configuration: {e}",
                details={"errors": e.errors(include_url=False)}
            ) from e

        logger.info("Configuration loaded successfully")
        cls._log_config_info()

        return cls._settings

    @classmethod
    def get_settings(cls) -> CacheSettings:
        """
        Get current settings instance.

        Raises:
            ConfigurationError: If config not loaded
        """
        if cls._settings is None:
            raise ConfigurationError(
                "Configuration not loaded. Call load_config() first."
            )
        return cls._settings

    @classmethod
    def reload_config(
        cls,
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> CacheSettings:
        """Drop the loaded settings and load them again."""
        cls._settings = None
        return cls.load_config(env_file, overrides)

    @classmethod
    def reset(cls) -> None:
        """Forget loaded settings (useful for testing)."""
        cls._settings = None

    @classmethod
    def _log_config_info(cls) -> None:
        """Log non-sensitive configuration information."""
        if not cls._settings:
            return

        logger.info(f"Redis: {cls._settings.masked_redis_url()}")
        logger.info(f"Key prefix: {cls._settings.key_prefix!r}")
        logger.info(f"Default duration: {cls._settings.default_duration}s")
        logger.info(f"Flush scope: {cls._settings.flush_scope.value}")
        logger.info(f"Serializer: {cls._settings.serializer}")

        if cls._settings.flushes_database():
            logger.warning(
                "flush() will clear the entire Redis database, "
                "including keys outside the cache prefix"
            )


# Convenience function
def get_settings() -> CacheSettings:
    """Get current settings instance."""
    return ConfigLoader.get_settings()
