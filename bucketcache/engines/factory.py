"""
bucketcache — Engine Factory

Resolves an engine selector (short name, import identifier, or factory)
into a callable that builds an engine from ``(options, bucket)``.

Identifiers take the form ``"package.module"`` or ``"package.module:attr"``.
A bare module must expose an ``Engine`` attribute.

Examples:
    from bucketcache.engines.factory import register_engine, resolve_engine

    factory = resolve_engine("memory")
    engine = factory(BucketOptions(), bucket)

    # Plugins can claim a short name
    register_engine("sqlite", "my_sqlite_engine:SqliteEngine")
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from typing import Any

from ..errors import InvalidArgumentError, MissingDependencyError

logger = logging.getLogger(__name__)

EngineFactory = Callable[..., Any]

# Reserved short names and the identifiers they expand to
ENGINES: dict[str, str | EngineFactory] = {
    "memory": "bucketcache.engines.memory:MemoryEngine",
    "redis": "bucketcache.engines.redis:RedisEngine",
    "mongo": "bucketcache_mongo",
}

_INSTALL_HINTS = {
    "bucketcache.engines.redis": "pip install 'bucketcache[redis]'",
    "bucketcache_mongo": "pip install bucketcache-mongo",
}


def register_engine(name: str, target: str | EngineFactory) -> None:
    """
    Register (or override) a short engine name.

    Args:
        name: Short name callers pass as ``engine``
        target: Import identifier or engine factory
    """
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("Engine name must be a non-empty string", details={"name": repr(name)})
    if not isinstance(target, str) and not callable(target):
        raise InvalidArgumentError(
            "Engine target must be an import identifier or a factory",
            details={"name": name, "target_type": type(target).__name__},
        )

    ENGINES[name] = target
    logger.debug("Registered engine '%s'", name, extra={"engine": name})


def list_engines() -> list[str]:
    """List registered short engine names."""
    return list(ENGINES.keys())


def _import_identifier(identifier: str) -> EngineFactory:
    """Import ``module[:attr]`` and return the engine factory it names."""
    module_name, _, attr = identifier.partition(":")
    attr = attr or "Engine"

    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        logger.error(
            "Engine module '%s' could not be imported: %s",
            module_name,
            e,
            extra={"engine": identifier, "missing": e.name},
        )
        raise MissingDependencyError(
            module_name,
            feature=f"engine '{identifier}'",
            install_hint=_INSTALL_HINTS.get(module_name),
            details={"missing_module": e.name, "error": str(e)},
        ) from e

    try:
        factory = getattr(module, attr)
    except AttributeError as e:
        raise MissingDependencyError(
            identifier,
            feature=f"engine '{identifier}'",
            details={"module": module_name, "attribute": attr},
        ) from e

    if not callable(factory):
        raise InvalidArgumentError(
            f"Engine '{identifier}' is not callable",
            details={"engine": identifier, "type": type(factory).__name__},
        )
    return factory


def resolve_engine(engine: str | EngineFactory) -> EngineFactory:
    """
    Turn an engine selector into an engine factory.

    Args:
        engine: Short name, import identifier, or factory

    Returns:
        Callable building an engine from ``(options, bucket)``

    Raises:
        InvalidArgumentError: If ``engine`` is neither a string nor callable
        MissingDependencyError: If the named engine cannot be imported
    """
    if not isinstance(engine, str) and not callable(engine):
        raise InvalidArgumentError(
            "Invalid engine format, engine must be a string or callable",
            details={"engine_type": type(engine).__name__},
        )

    if callable(engine):
        return engine

    target = ENGINES.get(engine, engine)
    if callable(target):
        return target

    return _import_identifier(target)
