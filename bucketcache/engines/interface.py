"""
bucketcache — Engine Interface

Defines the capability set every storage engine exposes to a bucket.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..bucket import Bucket
    from ..config import BucketOptions


class EngineInterface(ABC):
    """
    Abstract base class for storage engines.

    Engines are constructed as ``Engine(options, bucket)`` and receive fully
    qualified keys (already carrying the bucket prefix). Storage, expiry and
    serialization are entirely the engine's business.
    """

    @abstractmethod
    def __init__(self, options: BucketOptions, bucket: Bucket | None = None) -> None:
        """
        Initialize the engine.

        Args:
            options: Options of the bucket selecting this engine
            bucket: The owning bucket
        """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """
        Retrieve a value.

        Args:
            key: Fully qualified key

        Returns:
            Stored value, or None if absent or expired
        """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | float) -> None:
        """
        Store a value.

        Args:
            key: Fully qualified key
            value: Value to store
            ttl: Time-to-live in seconds (0 = no expiry)
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a single key.

        Args:
            key: Fully qualified key
        """

    @abstractmethod
    async def clear(self, prefix: str) -> None:
        """
        Remove every entry whose key starts with ``prefix``.

        Args:
            prefix: Namespace prefix of the bucket
        """
