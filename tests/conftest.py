"""
Keyspace Cache — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import AsyncGenerator

import pytest

from keyspace_cache.cache import NamespacedCache
from keyspace_cache.store.backends.memory import MemoryStore

# Set test environment
os.environ["ENVIRONMENT"] = "local"
os.environ["LOG_LEVEL"] = "DEBUG"


@pytest.fixture
def test_redis_url() -> str:
    """Redis node address for testing (database 15 is selected separately)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379")


@pytest.fixture
def memory_store() -> MemoryStore:
    """Fresh in-memory store."""
    return MemoryStore()


@pytest.fixture
async def cache(memory_store: MemoryStore) -> AsyncGenerator[NamespacedCache, None]:
    """Namespaced cache with prefix 'T_' over a fresh memory store."""
    cache = NamespacedCache(memory_store, namespace="T_")
    yield cache
    await cache.close()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every configuration variable the loader reads."""
    for name in (
        "ENVIRONMENT",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "CACHE_NAMESPACE",
        "CACHE_TTL_SECONDS",
        "CACHE_MAX_CONCURRENCY",
        "CACHE_PHYSICAL_DELETE_KEYS",
        "STORE_BACKEND",
        "STORE_NODES",
        "STORE_DATABASE",
        "STORE_MAX_CONNECTIONS",
        "STORE_SOCKET_TIMEOUT",
        "STORE_SCAN_COUNT",
        "STORE_READ_FROM_REPLICAS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
