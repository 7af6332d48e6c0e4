"""
bucketcache — Configuration Module

Provides typed settings loading and bucket option validation.
"""

from .loader import configure_logging, get_config, load_config, reload_config, reset_config
from .schemas import (
    DEFAULT_COUNT,
    DEFAULT_ENGINE,
    DEFAULT_TTL,
    BucketOptions,
    CacheSettings,
    Environment,
    LogLevel,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    "configure_logging",
    # Models
    "CacheSettings",
    "BucketOptions",
    # Enums
    "Environment",
    "LogLevel",
    # Defaults
    "DEFAULT_COUNT",
    "DEFAULT_ENGINE",
    "DEFAULT_TTL",
]
