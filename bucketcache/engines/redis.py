"""
bucketcache — Redis Engine

Asynchronous Redis engine with:
- JSON serialization for values
- Per-key TTL via EX seconds
- Prefix clear using SCAN + batched DEL

Requires: redis>=5.0 with asyncio support

Example:
    bucket = Bucket("sessions", {"engine": "redis", "redis_url": "redis://localhost:6379/0"})
    await bucket.set("u1", {"id": 1}, ttl=30)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from ..config import BucketOptions
from ..errors import ConfigurationError
from .interface import EngineInterface

if TYPE_CHECKING:
    from ..bucket import Bucket

logger = logging.getLogger(__name__)

try:
    from redis.asyncio import Redis
except ImportError as e:  # pragma: no cover
    raise ModuleNotFoundError(
        "Redis async client is required but not installed. Install with: pip install 'redis>=5.0.0'",
        name="redis",
    ) from e


class RedisEngine(EngineInterface):
    """
    Redis engine with JSON serialization and TTL.

    Notes:
    - Keys arrive fully qualified; no extra namespace is added.
    - TTL 0 means no expiry.
    - Errors from the client are logged and re-raised unchanged.
    """

    def __init__(self, options: BucketOptions | None = None, bucket: Bucket | None = None) -> None:
        options = options or BucketOptions()
        if not options.redis_url:
            raise ConfigurationError(
                "redis_url must be set when engine is 'redis'",
                details={"env": "REDIS_URL", "engine": "redis"},
            )

        self.default_ttl = max(0, options.ttl)
        self.bucket = bucket

        # Lazy connection; connects on first command
        self._client = Redis.from_url(  # type: ignore[call-overload]
            url=options.redis_url,
            decode_responses=True,
            max_connections=options.redis_max_connections,
            socket_timeout=options.redis_socket_timeout,
        )

    # ------------ Helpers ------------

    @staticmethod
    def _to_json(value: Any) -> str:
        """Serialize value to JSON string."""
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _from_json(data: str | bytes | None) -> Any | None:
        """Deserialize JSON string. Non-JSON payloads are returned raw."""
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        try:
            return json.loads(data)
        except ValueError as e:
            logger.warning(
                "Failed to decode JSON from Redis, returning raw data: %s",
                e,
                extra={"data_preview": data[:100], "error": str(e)},
            )
            return data

    def _ttl_seconds(self, ttl: int | float | None) -> int | float | None:
        """Normalize TTL: None -> default, 0 or negative -> no expiry."""
        if ttl is None:
            ttl = self.default_ttl
        return ttl if ttl > 0 else None

    # ------------ Core Interface ------------

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        try:
            data = await self._client.get(key)
        except Exception as e:
            logger.error(
                "Failed to get key '%s' from Redis: %s",
                key,
                e,
                extra={"key": key, "error": str(e)},
                exc_info=True,
            )
            raise
        return self._from_json(data)

    async def set(self, key: str, value: Any, ttl: int | float | None = None) -> None:
        """Store a value with optional TTL."""
        payload = self._to_json(value)
        seconds = self._ttl_seconds(ttl)
        # EX only takes whole seconds; fractional TTLs go through PX.
        expiry: dict[str, int] = {}
        if seconds is not None:
            if float(seconds).is_integer():
                expiry["ex"] = int(seconds)
            else:
                expiry["px"] = max(1, round(seconds * 1000))
        try:
            await self._client.set(name=key, value=payload, **expiry)
        except Exception as e:
            logger.error(
                "Failed to set key '%s' in Redis: %s",
                key,
                e,
                extra={"key": key, "ttl": ttl, "error": str(e)},
                exc_info=True,
            )
            raise

    async def delete(self, key: str) -> None:
        """Delete a single key."""
        try:
            await self._client.delete(key)
        except Exception as e:
            logger.error(
                "Failed to delete key '%s' from Redis: %s",
                key,
                e,
                extra={"key": key, "error": str(e)},
                exc_info=True,
            )
            raise

    async def clear(self, prefix: str) -> None:
        """
        Clear all keys under ``prefix``.

        Implementation: SCAN match "<prefix>*" and DEL in batches.
        """
        pattern = f"{prefix}*"
        cursor = 0
        total_deleted = 0
        batch_size = 1000

        try:
            while True:
                cursor, keys = await self._client.scan(cursor=cursor, match=pattern, count=batch_size)
                if keys:
                    total_deleted += await self._client.delete(*keys)
                if cursor == 0:
                    break
        except Exception as e:
            logger.error(
                "Failed to clear Redis keys under '%s': %s",
                prefix,
                e,
                extra={"prefix": prefix, "error": str(e)},
                exc_info=True,
            )
            raise

        logger.info("Cleared %d keys under prefix '%s'", total_deleted, prefix)

    async def close(self) -> None:
        """Close the Redis client and release the connection pool."""
        await self._client.aclose()
        logger.debug("Closed Redis engine")
