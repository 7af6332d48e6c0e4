"""
bucketcache — Namespaced Cache Facade

Uniform get/set/delete/clear API over interchangeable storage engines.

Usage:
    from bucketcache import Bucket

    bucket = Bucket("sessions", {"ttl": 30, "engine": "memory"})
    await bucket.set("u1", {"id": 1})
    value = await bucket.get("u1")
"""

__version__ = "1.0.0"

from .bucket import Bucket
from .config import BucketOptions, configure_logging, get_config, load_config
from .engines import EngineInterface, list_engines, register_engine
from .errors import (
    BucketCacheError,
    ConfigurationError,
    InvalidArgumentError,
    MissingDependencyError,
)

__all__ = [
    "Bucket",
    "BucketOptions",
    # Engines
    "EngineInterface",
    "list_engines",
    "register_engine",
    # Configuration
    "configure_logging",
    "get_config",
    "load_config",
    # Errors
    "BucketCacheError",
    "ConfigurationError",
    "InvalidArgumentError",
    "MissingDependencyError",
]
