"""
Keyspace Cache — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import load_config
from .schemas import (
    DEFAULT_TTL_SECONDS,
    CacheConfig,
    Environment,
    KeyspaceConfig,
    LogFormat,
    LogLevel,
    StoreBackend,
    StoreConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Main config
    "KeyspaceConfig",
    # Enums
    "Environment",
    "StoreBackend",
    "LogLevel",
    "LogFormat",
    # Config sections
    "StoreConfig",
    "CacheConfig",
    "DEFAULT_TTL_SECONDS",
]
