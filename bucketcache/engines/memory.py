"""
bucketcache — Memory Engine

In-process engine with LRU eviction and lazy TTL expiry.
Suitable for single-process deployments and tests.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from typing import TYPE_CHECKING, Any

from ..config import BucketOptions
from .interface import EngineInterface

if TYPE_CHECKING:
    from ..bucket import Bucket

logger = logging.getLogger(__name__)


class MemoryEngine(EngineInterface):
    """
    In-memory engine.

    Features:
    - LRU eviction once ``options.count`` entries are stored
    - Per-key TTL (0 = no expiry), checked on read
    - Prefix clear for bucket namespaces
    """

    def __init__(self, options: BucketOptions | None = None, bucket: Bucket | None = None) -> None:
        options = options or BucketOptions()
        self.max_size = options.count
        self.default_ttl = options.ttl
        self.bucket = bucket

        # key -> (value, expiry_time)
        self._store: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()

        self._hits = 0
        self._misses = 0
        self._evictions = 0

        self._lock = asyncio.Lock()

    def _is_expired(self, expiry: float | None) -> bool:
        """Check if entry is expired."""
        if expiry is None:
            return False
        return time.time() > expiry

    async def get(self, key: str) -> Any | None:
        """Retrieve value from the store."""
        async with self._lock:
            if key not in self._store:
                self._misses += 1
                return None

            value, expiry = self._store[key]

            if self._is_expired(expiry):
                del self._store[key]
                self._misses += 1
                return None

            # Mark as recently used
            self._store.move_to_end(key)
            self._hits += 1
            return value

    async def set(self, key: str, value: Any, ttl: int | float | None = None) -> None:
        """Store value, evicting the least recently used entry when full."""
        if ttl is None:
            ttl = self.default_ttl

        expiry = time.time() + ttl if ttl > 0 else None

        async with self._lock:
            if key not in self._store and len(self._store) >= self.max_size:
                evicted_key, _ = self._store.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted key from memory engine: %s", evicted_key)

            self._store[key] = (value, expiry)
            self._store.move_to_end(key)

    async def delete(self, key: str) -> None:
        """Delete key if present."""
        async with self._lock:
            self._store.pop(key, None)

    async def clear(self, prefix: str) -> None:
        """Remove every key under ``prefix``."""
        async with self._lock:
            doomed = [key for key in self._store if key.startswith(prefix)]
            for key in doomed:
                del self._store[key]

        logger.debug("Cleared %d entries under prefix '%s'", len(doomed), prefix)

    async def get_stats(self) -> dict[str, Any]:
        """Get engine statistics."""
        async with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

            return {
                "engine": "memory",
                "size": len(self._store),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "evictions": self._evictions,
            }

    async def close(self) -> None:
        """Memory engine holds no external resources."""
        logger.debug("Memory engine closed")
