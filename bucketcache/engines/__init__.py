"""
bucketcache — Engines

Exports the engine contract, the engine factory, and the memory engine.

The redis engine is lazy-loaded by the factory to avoid a hard dependency.
"""

from .factory import ENGINES, list_engines, register_engine, resolve_engine
from .interface import EngineInterface
from .memory import MemoryEngine

__all__ = [
    "ENGINES",
    "EngineInterface",
    "MemoryEngine",
    "list_engines",
    "register_engine",
    "resolve_engine",
]
