"""
bucketcache — Engine Factory Tests

Tests short-name expansion, import identifiers, the plugin registry, and the
distinction between a missing engine and an engine that fails to load.
"""

from pathlib import Path
from typing import Any

import pytest

from bucketcache.engines.factory import ENGINES, list_engines, register_engine, resolve_engine
from bucketcache.engines.memory import MemoryEngine
from bucketcache.errors import InvalidArgumentError, MissingDependencyError


class TestShortNames:
    def test_reserved_names(self) -> None:
        assert {"memory", "redis", "mongo"} <= set(list_engines())

    def test_memory_resolves_to_memory_engine(self) -> None:
        assert resolve_engine("memory") is MemoryEngine

    def test_redis_resolves(self) -> None:
        from bucketcache.engines.redis import RedisEngine

        assert resolve_engine("redis") is RedisEngine

    def test_mongo_plugin_not_installed(self) -> None:
        """Document store engine ships as an external plugin."""
        with pytest.raises(MissingDependencyError) as exc_info:
            resolve_engine("mongo")
        assert exc_info.value.package == "bucketcache_mongo"
        assert "pip install" in exc_info.value.message


class TestIdentifiers:
    def test_module_attr_identifier(self) -> None:
        assert resolve_engine("bucketcache.engines.memory:MemoryEngine") is MemoryEngine

    def test_callable_passes_through(self) -> None:
        def factory(options: Any, bucket: Any) -> Any:
            return object()

        assert resolve_engine(factory) is factory

    @pytest.mark.parametrize("engine", [None, 1, 2.5, ["memory"], {"engine": "memory"}])
    def test_invalid_selector_type(self, engine: Any) -> None:
        with pytest.raises(InvalidArgumentError):
            resolve_engine(engine)

    def test_unknown_module(self) -> None:
        with pytest.raises(MissingDependencyError) as exc_info:
            resolve_engine("bucketcache_engine_that_does_not_exist")
        assert exc_info.value.details["missing_module"] == "bucketcache_engine_that_does_not_exist"

    def test_missing_attribute(self) -> None:
        with pytest.raises(MissingDependencyError):
            resolve_engine("bucketcache.engines.memory:NoSuchEngine")

    def test_bare_module_needs_engine_attribute(self) -> None:
        """A bare module identifier resolves its ``Engine`` attribute."""
        with pytest.raises(MissingDependencyError):
            resolve_engine("bucketcache.engines.memory")

    def test_bare_module_with_engine_attribute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "bucketcache_test_plugin.py").write_text(
            "class Engine:\n    def __init__(self, options, bucket):\n        self.options = options\n"
        )
        monkeypatch.syspath_prepend(str(tmp_path))

        factory = resolve_engine("bucketcache_test_plugin")
        assert factory.__name__ == "Engine"

    def test_missing_transitive_import(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """An engine whose own dependency is absent counts as not installed."""
        (tmp_path / "bucketcache_needs_driver.py").write_text("import bucketcache_absent_driver\nEngine = object\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(MissingDependencyError) as exc_info:
            resolve_engine("bucketcache_needs_driver")
        assert exc_info.value.details["missing_module"] == "bucketcache_absent_driver"

    def test_other_load_errors_reraised_unchanged(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "bucketcache_broken_plugin.py").write_text("raise RuntimeError('plugin exploded')\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(RuntimeError, match="plugin exploded"):
            resolve_engine("bucketcache_broken_plugin")


class TestRegistry:
    def test_register_identifier(self) -> None:
        register_engine("lru", "bucketcache.engines.memory:MemoryEngine")
        assert "lru" in list_engines()
        assert resolve_engine("lru") is MemoryEngine

    def test_register_factory(self) -> None:
        def factory(options: Any, bucket: Any) -> Any:
            return "engine"

        register_engine("custom", factory)
        assert ENGINES["custom"] is factory
        assert resolve_engine("custom") is factory

    def test_override_reserved_name(self) -> None:
        def factory(options: Any, bucket: Any) -> Any:
            return "engine"

        register_engine("mongo", factory)
        assert resolve_engine("mongo") is factory

    @pytest.mark.parametrize("name", ["", None, 5])
    def test_invalid_name(self, name: Any) -> None:
        with pytest.raises(InvalidArgumentError):
            register_engine(name, "bucketcache.engines.memory:MemoryEngine")

    def test_invalid_target(self) -> None:
        with pytest.raises(InvalidArgumentError):
            register_engine("bad", 42)  # type: ignore[arg-type]
