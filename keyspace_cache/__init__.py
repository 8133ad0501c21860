"""
Keyspace Cache

Namespaced cache access layer over a shared key-value store.
"""

from .cache import KeyNamespace, NamespacedCache
from .config import KeyspaceConfig, load_config
from .errors import (
    CacheError,
    ConfigurationError,
    KeyspaceError,
    MalformedKeyError,
    StoreConnectionError,
    StoreError,
    StoreOperationError,
)
from .store import StoreInterface, create_store

__version__ = "0.1.0"

__all__ = [
    "NamespacedCache",
    "KeyNamespace",
    "StoreInterface",
    "create_store",
    "KeyspaceConfig",
    "load_config",
    "KeyspaceError",
    "ConfigurationError",
    "CacheError",
    "StoreError",
    "StoreConnectionError",
    "StoreOperationError",
    "MalformedKeyError",
]
