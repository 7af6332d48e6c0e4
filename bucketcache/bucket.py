"""
bucketcache — Bucket

A bucket is a named cache namespace in front of exactly one storage engine.
Every key is prefixed with ``cache:<name>:`` before it reaches the engine.

Operations are coroutines. Each one also accepts an optional completion
``callback(error, value)``; when a callback is supplied, engine errors are
delivered to it instead of being raised. Engine errors are never translated.

Examples:
    from bucketcache import Bucket

    sessions = Bucket("sessions", {"ttl": 30})
    await sessions.set("u1", {"id": 1})
    await sessions.get("u1")              # {"id": 1}
    await sessions.cache("u2", {"id": 2})  # get-or-set
    await sessions.clear()

The ``cache`` combinator is a plain read followed by a write. Two callers
racing on the same key may both miss and both write; the last write wins.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from .config import DEFAULT_COUNT, DEFAULT_TTL, BucketOptions, get_config
from .engines.factory import EngineFactory, resolve_engine
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

Callback = Callable[[BaseException | None, Any], Any]


async def _notify(callback: Callback, error: BaseException | None, value: Any) -> None:
    """Invoke a completion callback, awaiting it if it is a coroutine function."""
    result = callback(error, value)
    if inspect.isawaitable(result):
        await result


async def _yield_none() -> None:
    """Complete on the next event loop iteration with no value."""
    await asyncio.sleep(0)


def _coerce_options(options: BucketOptions | Mapping[str, Any] | None, pin_count: bool) -> BucketOptions:
    """
    Layer caller options over the loaded settings into a private BucketOptions.

    Only fields the caller actually supplied override the settings, so
    environment values such as ``REDIS_URL`` survive partial options.
    """
    if options is None:
        overrides: dict[str, Any] = {}
    elif isinstance(options, BucketOptions):
        overrides = options.model_dump(exclude_unset=True)
    elif isinstance(options, Mapping):
        overrides = {k: v for k, v in options.items() if v is not None}
    else:
        raise InvalidArgumentError(
            "Invalid options format, options must be a mapping or BucketOptions",
            details={"options_type": type(options).__name__},
        )

    try:
        resolved = BucketOptions(**{**get_config().bucket.model_dump(), **overrides})
    except ValidationError as e:
        raise InvalidArgumentError(
            "Invalid bucket options",
            details={"validation_errors": e.errors(include_context=False)},
        ) from e

    if pin_count:
        resolved.count = DEFAULT_COUNT
    return resolved


class Bucket:
    """
    Namespaced key/value cache over a pluggable engine.

    Args:
        name: Namespace name, used to build the key prefix
        options: ``ttl`` (default 60), ``engine`` (default "memory") and any
            engine-specific settings. ``count`` is always 1000.

    Raises:
        InvalidArgumentError: If ``name`` is not a non-empty string or the
            options do not validate
        MissingDependencyError: If the named engine cannot be imported
    """

    def __init__(self, name: str, options: BucketOptions | Mapping[str, Any] | None = None) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(
                "Invalid name format, name argument must be a non-empty string",
                details={"name_type": type(name).__name__},
            )

        self._name = name
        self._prefix = f"cache:{name}:"
        self._options = _coerce_options(options, pin_count=True)
        self._ttl = self._options.ttl or DEFAULT_TTL
        self._engine: Any = None

        self.engine(self._options.engine)

    def __repr__(self) -> str:
        return f"Bucket(name={self._name!r}, engine={type(self._engine).__name__})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def ttl(self) -> int | float:
        return self._ttl

    @property
    def options(self) -> BucketOptions:
        return self._options

    def engine(
        self,
        engine: str | EngineFactory | None = None,
        options: BucketOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Select the storage engine, or return the active one when called bare.

        The engine is resolved and built before it replaces the active one,
        so a failed selection leaves the previous engine in place. The
        replaced engine is dropped without being closed.

        Args:
            engine: Short name, import identifier, or factory
            options: Options handed to the engine (default: bucket options)

        Returns:
            The bucket when selecting, the active engine when called bare
        """
        if engine is None and options is None:
            return self._engine

        if engine is None:
            raise InvalidArgumentError(
                "An engine is required when engine options are given",
                details={"bucket": self._name},
            )

        factory = resolve_engine(engine)
        engine_options = self._options if options is None else _coerce_options(options, pin_count=False)

        instance = factory(engine_options, self)

        logger.info(
            "Bucket '%s' using engine %s",
            self._name,
            type(instance).__name__,
            extra={"bucket": self._name, "engine": engine if isinstance(engine, str) else repr(engine)},
        )
        self._engine = instance
        return self

    def key(self, key: Any) -> str:
        """Wrap ``key`` with the bucket prefix."""
        return f"{self._prefix}{key}"

    async def _settle(self, operation: Callable[[], Any], callback: Callback | None) -> Any:
        """Run an engine operation and route its outcome to the caller."""
        try:
            value = operation()
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            if callback is None:
                raise
            await _notify(callback, e, None)
            return None

        if callback is not None:
            await _notify(callback, None, value)
        return value

    async def get(self, key: Any, callback: Callback | None = None) -> Any | None:
        """
        Get an entry.

        Returns:
            The stored value, or None when absent
        """
        return await self._settle(lambda: self._engine.get(self.key(key)), callback)

    async def set(
        self,
        key: Any,
        data: Any,
        ttl: int | float | Callback | None = None,
        callback: Callback | None = None,
    ) -> Bucket:
        """
        Set an entry.

        A ``None`` value is a successful no-op: the engine is not called and
        the callback fires after one event loop iteration.

        Args:
            key: Entry key (prefixed before storage)
            data: Value to store
            ttl: Seconds to live (default: bucket ttl); a callable here is
                taken as the callback
            callback: Completion callback
        """
        if callable(ttl):
            callback, ttl = ttl, None

        if data is None:
            logger.debug("Skipping set of None for key '%s'", key, extra={"bucket": self._name})
            await self._settle(_yield_none, callback)
            return self

        await self._settle(
            lambda: self._engine.set(self.key(key), data, ttl or self._ttl),
            callback,
        )
        return self

    async def cache(
        self,
        key: Any,
        data: Any,
        ttl: int | float | Callback | None = None,
        callback: Callback | None = None,
    ) -> Any | None:
        """
        Get-or-set an entry.

        Returns the existing value when present (``data`` is discarded),
        otherwise stores ``data`` and returns it. A failed read is reported
        and nothing is written.
        """
        if callable(ttl):
            callback, ttl = ttl, None

        async def get_or_set() -> Any:
            existing = await self.get(key)
            if existing is not None:
                return existing
            await self.set(key, data, ttl)
            return data

        return await self._settle(get_or_set, callback)

    async def delete(self, key: Any = "", callback: Callback | None = None) -> Bucket:
        """
        Delete an entry.

        A callable passed as ``key`` is taken as the callback, and the bare
        prefix (empty key) is deleted.
        """
        if callable(key):
            callback, key = key, ""

        await self._settle(lambda: self._engine.delete(self.key(key)), callback)
        return self

    async def clear(self, callback: Callback | None = None) -> Bucket:
        """Clear every entry under this bucket's prefix."""
        await self._settle(lambda: self._engine.clear(self.key("")), callback)
        return self
