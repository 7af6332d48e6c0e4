"""
bucketcache — Configuration Schemas

Typed configuration models using Pydantic for validation and type safety.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt

# Capacity hint handed to every engine; buckets always pin it to this value.
DEFAULT_COUNT = 1000
DEFAULT_TTL = 60
DEFAULT_ENGINE = "memory"


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BucketOptions(BaseModel):
    """
    Options a bucket is constructed with and hands to its engine.

    Unknown fields are kept so third-party engines can read their own settings.
    """

    ttl: NonNegativeInt | NonNegativeFloat = Field(default=DEFAULT_TTL, description="Default entry TTL in seconds")
    engine: str | Callable[..., Any] = Field(
        default=DEFAULT_ENGINE,
        description="Engine short name, import identifier, or factory",
    )
    count: int = Field(default=DEFAULT_COUNT, ge=1, description="Capacity hint for engines")

    # Redis-specific settings (only read by the redis engine)
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    redis_max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    redis_socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")

    model_config = ConfigDict(extra="allow")


class CacheSettings(BaseModel):
    """Root settings for bucketcache, loaded from the environment."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    bucket: BucketOptions = Field(default_factory=BucketOptions)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
