"""
Keyspace Cache — Store Module

Capability bindings for the backing key-value store.

Usage:
    from keyspace_cache.store import create_store

    store = create_store(config.store)
    await store.set_with_ttl("ns_key", "value", 3600)
"""

from .factory import create_store
from .glob import escape_glob, glob_match
from .interface import StoreInterface

__all__ = [
    "create_store",
    "StoreInterface",
    "escape_glob",
    "glob_match",
]
