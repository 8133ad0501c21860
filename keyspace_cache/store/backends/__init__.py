"""
Keyspace Cache — Store Backends

Exports available store implementations.

Redis backend is lazy-loaded via factory.py to avoid import overhead.
"""

from .memory import MemoryStore

__all__ = [
    "MemoryStore",
]
