"""
Keyspace Cache — Cache Module

Namespaced cache layer over a pluggable store binding.

Usage:
    from keyspace_cache.cache import NamespacedCache

    cache = NamespacedCache.from_config(load_config())
    await cache.put("key", "value")
    value = await cache.get("key")
"""

from .keys import KeyNamespace
from .namespaced import NamespacedCache

__all__ = [
    "KeyNamespace",
    "NamespacedCache",
]
