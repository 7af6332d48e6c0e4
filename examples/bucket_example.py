"""
Bucket Usage Example

Demonstrates the bucketcache facade.

This example shows:
- Creating buckets on the default memory engine
- Get, set, get-or-set, delete, and clear
- Completion callbacks
- Plugging in a custom engine factory
- Handling a missing engine
"""

import asyncio
import logging
from typing import Any

from bucketcache import Bucket, MissingDependencyError, configure_logging, register_engine

configure_logging("INFO")
logger = logging.getLogger(__name__)


async def example_basic_usage() -> None:
    """Example: Basic operations on the memory engine."""
    logger.info("=" * 60)
    logger.info("Example 1: Basic operations")
    logger.info("=" * 60)

    sessions = Bucket("sessions", {"ttl": 30})
    logger.info("Created %r with prefix %s", sessions, sessions.prefix)

    await sessions.set("u1", {"id": 1})
    logger.info("get u1 -> %s", await sessions.get("u1"))

    await sessions.clear()
    logger.info("get u1 after clear -> %s", await sessions.get("u1"))


async def example_cache_aside() -> None:
    """Example: Get-or-set keeps the first stored value."""
    logger.info("=" * 60)
    logger.info("Example 2: Get-or-set")
    logger.info("=" * 60)

    profiles = Bucket("profiles")
    logger.info("first cache() -> %s", await profiles.cache("u1", "A"))
    logger.info("second cache() -> %s", await profiles.cache("u1", "B"))


async def example_callbacks() -> None:
    """Example: Completion callbacks instead of return values."""
    logger.info("=" * 60)
    logger.info("Example 3: Callbacks")
    logger.info("=" * 60)

    def on_done(error: BaseException | None, value: Any) -> None:
        logger.info("callback error=%s value=%s", error, value)

    bucket = Bucket("callbacks")
    await bucket.set("k", "v", 10, on_done)
    await bucket.get("k", on_done)
    await bucket.delete(on_done)


class DictEngine:
    """Minimal engine implementing the four capabilities over a dict."""

    def __init__(self, options: Any, bucket: Any) -> None:
        self.data: dict[str, Any] = {}

    async def get(self, key: str) -> Any:
        return self.data.get(key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def clear(self, prefix: str) -> None:
        for key in [k for k in self.data if k.startswith(prefix)]:
            del self.data[key]


async def example_custom_engine() -> None:
    """Example: Registering and selecting a custom engine."""
    logger.info("=" * 60)
    logger.info("Example 4: Custom engine")
    logger.info("=" * 60)

    register_engine("dict", DictEngine)
    bucket = Bucket("custom", {"engine": "dict"})
    await bucket.set("k", [1, 2, 3])
    logger.info("raw engine contents: %s", bucket.engine().data)

    try:
        bucket.engine("mongo")
    except MissingDependencyError as e:
        logger.warning("Engine not installed: %s", e.message)


async def main() -> None:
    """Run all examples."""
    await example_basic_usage()
    await example_cache_aside()
    await example_callbacks()
    await example_custom_engine()


if __name__ == "__main__":
    asyncio.run(main())
