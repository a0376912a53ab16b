"""
Cache Settings

Configuration classes using Pydantic for validation.
"""

from enum import Enum
from urllib.parse import urlsplit, urlunsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FlushScope(str, Enum):
    """What ``Cache.flush()`` removes."""

    # Only keys under this cache's key prefix
    NAMESPACE = "namespace"
    # Every key of the underlying database, including data not written by the cache
    DATABASE = "database"


class CacheSettings(BaseSettings):
    """Cache configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL"
    )
    key_prefix: str = Field(
        default="",
        description="Namespace prepended to every store key"
    )
    default_duration: float = Field(
        default=0,
        ge=0,
        description="Default time to live in seconds, 0 to never expire"
    )
    flush_scope: FlushScope = Field(
        default=FlushScope.NAMESPACE,
        description="Whether flush clears the key prefix or the whole database"
    )
    serializer: str = Field(
        default="json",
        description="Value serializer (json or pickle)"
    )
    socket_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Redis socket timeout in seconds"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("serializer")
    @classmethod
    def validate_serializer(cls, v: str) -> str:
        """Validate serializer name."""
        value = v.strip().lower()
        valid_serializers = {"json", "pickle"}
        if value not in valid_serializers:
            raise ValueError(
                f"Invalid serializer: {v}. Must be one of {valid_serializers}"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        value = v.strip().upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if value not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {valid_levels}"
            )
        return value

    def masked_redis_url(self) -> str:
        """Redis URL with any password replaced by ***."""
        parts = urlsplit(self.redis_url)
        if not parts.password:
            return self.redis_url

        netloc = parts.netloc.rsplit("@", 1)[1]
        user = f"{parts.username}:" if parts.username else ":"
        return urlunsplit(parts._replace(netloc=f"{user}***@{netloc}"))

    def flushes_database(self) -> bool:
        """Check if flush clears the whole database."""
        return self.flush_scope is FlushScope.DATABASE
