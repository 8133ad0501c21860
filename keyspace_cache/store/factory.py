"""
Keyspace Cache — Store Factory

Builds a store binding from a StoreConfig.

Key points:
- Backend selection by StoreConfig.backend (memory | redis)
- Redis is imported lazily so the memory backend works without the redis client
- No instance registry: the caller owns the returned store

Examples:
    from keyspace_cache.store import create_store
    from keyspace_cache.config import StoreBackend, StoreConfig

    store = create_store(StoreConfig(backend=StoreBackend.REDIS, nodes=["redis://localhost:6379"]))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from ..config import StoreBackend, StoreConfig
from ..errors import ConfigurationError
from .backends.memory import MemoryStore
from .interface import StoreInterface

logger = logging.getLogger(__name__)


def _create_memory_store(config: StoreConfig) -> StoreInterface:
    """Internal helper to construct a memory store."""
    return MemoryStore()


def _create_redis_store(config: StoreConfig) -> StoreInterface:
    """Internal helper to construct a redis store with lazy import."""
    if not config.nodes:
        raise ConfigurationError(
            "STORE_NODES must be set when STORE_BACKEND=redis",
            details={"env": "STORE_NODES", "backend": "redis"},
        )

    try:
        from .backends.redis import RedisStore
    except ImportError as e:
        logger.error(
            "Redis backend selected but redis client is not installed",
            extra={"package": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "Redis backend selected but redis client is unavailable. "
            "Install with: pip install 'redis>=5.0.0' or add to dependencies.",
            details={"package": "redis>=5.0.0", "error": str(e), "backend": "redis"},
        ) from e

    return RedisStore(
        nodes=config.nodes,
        database=config.database,
        max_connections=config.max_connections,
        socket_timeout=config.socket_timeout,
        scan_count=config.scan_count,
        read_from_replicas=config.read_from_replicas,
    )


# Built once at import, never mutated
_STORE_BUILDERS: Mapping[StoreBackend, Callable[[StoreConfig], StoreInterface]] = MappingProxyType(
    {
        StoreBackend.MEMORY: _create_memory_store,
        StoreBackend.REDIS: _create_redis_store,
    }
)


def create_store(config: StoreConfig) -> StoreInterface:
    """
    Create a store binding based on configuration.

    Args:
        config: Store configuration

    Returns:
        Configured store instance (caller must close it)

    Raises:
        ConfigurationError: If the backend is unknown or unavailable
    """
    builder = _STORE_BUILDERS.get(StoreBackend(config.backend))
    if builder is None:  # pragma: no cover
        raise ConfigurationError(
            f"Unknown store backend: {config.backend}",
            details={"backend": str(config.backend), "supported": [b.value for b in StoreBackend]},
        )

    logger.info(
        "Creating store with backend: %s",
        config.backend.value,
        extra={"backend": config.backend.value, "nodes": config.nodes},
    )
    return builder(config)
