"""
bucketcache — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import asyncio
import os
from collections.abc import Generator
from typing import Any

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ.pop("BUCKETCACHE_ENGINE", None)
os.environ.pop("BUCKETCACHE_TTL", None)


class StubEngine:
    """
    Deterministic in-memory engine recording every call it receives.

    Set ``fail_with`` to make every operation raise that exception.
    """

    def __init__(self, options: Any = None, bucket: Any = None) -> None:
        self.options = options
        self.bucket = bucket
        self.store: dict[str, Any] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.fail_with: Exception | None = None

    def _record(self, *call: Any) -> None:
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    async def get(self, key: str) -> Any:
        self._record("get", key)
        value = self.store.get(key)
        # Suspend after reading so concurrent callers interleave
        await asyncio.sleep(0)
        return value

    async def set(self, key: str, value: Any, ttl: int) -> None:
        self._record("set", key, value, ttl)
        self.store[key] = value

    async def delete(self, key: str) -> None:
        self._record("delete", key)
        self.store.pop(key, None)

    async def clear(self, prefix: str) -> None:
        self._record("clear", prefix)
        for key in [k for k in self.store if k.startswith(prefix)]:
            del self.store[key]


class CallbackRecorder:
    """Completion callback capturing every ``(error, value)`` it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException | None, Any]] = []

    def __call__(self, error: BaseException | None, value: Any) -> None:
        self.calls.append((error, value))


@pytest.fixture
def stub_engine_factory() -> Any:
    """Factory building StubEngine instances; exposes the last one built."""

    def factory(options: Any, bucket: Any) -> StubEngine:
        factory.last = StubEngine(options, bucket)  # type: ignore[attr-defined]
        return factory.last  # type: ignore[attr-defined]

    factory.last = None  # type: ignore[attr-defined]
    return factory


@pytest.fixture
def callback() -> CallbackRecorder:
    """Recording completion callback."""
    return CallbackRecorder()


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Drop cached settings after each test to prevent state leakage."""
    yield
    from bucketcache.config import reset_config

    reset_config()


@pytest.fixture(autouse=True)
def restore_engine_registry() -> Generator[None, None, None]:
    """Restore the short-name engine registry after each test."""
    from bucketcache.engines.factory import ENGINES

    snapshot = dict(ENGINES)
    yield
    ENGINES.clear()
    ENGINES.update(snapshot)
