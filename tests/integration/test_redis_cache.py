"""
Keyspace Cache — Redis Integration Tests

Runs the namespaced cache against a live Redis server (database 15).
Requires Redis on localhost:6379 (or TEST_REDIS_URL); skipped otherwise.
"""

import os
import socket
from collections.abc import AsyncGenerator
from urllib.parse import urlsplit

import pytest

from keyspace_cache.cache import NamespacedCache
from keyspace_cache.store.backends.redis import RedisStore

# Check if Redis is available
try:
    _parts = urlsplit(os.environ.get("TEST_REDIS_URL", "redis://localhost:6379"))
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(1)
    redis_available = sock.connect_ex((_parts.hostname or "localhost", _parts.port or 6379)) == 0
    sock.close()
except OSError:
    redis_available = False

pytestmark = pytest.mark.skipif(not redis_available, reason="Redis server not available")

TEST_DATABASE = 15


class TestRedisNamespacedCache:
    """NamespacedCache over RedisStore."""

    @pytest.fixture
    async def store(self, test_redis_url: str) -> AsyncGenerator[RedisStore, None]:
        """Redis store on the test database, emptied before and after each test."""
        store = RedisStore(nodes=[test_redis_url], database=TEST_DATABASE, socket_timeout=2)
        await store._primary.flushdb()
        yield store
        await store._primary.flushdb()
        await store.close()

    @pytest.fixture
    def cache(self, store: RedisStore) -> NamespacedCache:
        return NamespacedCache(store, namespace="T_")

    async def test_concrete_scenario(self, cache: NamespacedCache) -> None:
        await cache.put("a", "1")
        await cache.put("ab", "2")

        assert await cache.get_multiple(["a", "ab", "zzz"]) == ["1", "2", None]
        assert await cache.delete_by_pattern("a") == {"T_a": True, "T_ab": True}
        assert await cache.get_all() == []

    async def test_put_sets_ttl(self, cache: NamespacedCache, store: RedisStore) -> None:
        await cache.put("k", "v")

        ttl = await store._primary.ttl("T_k")
        assert 0 < ttl <= cache.ttl_seconds

    async def test_values_stored_as_json(self, cache: NamespacedCache, store: RedisStore) -> None:
        await cache.put("k", "Hello 世界")

        assert await store._primary.get("T_k") == '"Hello 世界"'
        assert await cache.get("k") == "Hello 世界"

    async def test_namespace_isolation(self, store: RedisStore) -> None:
        first = NamespacedCache(store, namespace="A_")
        second = NamespacedCache(store, namespace="B_")

        await first.put("k", "1")

        assert await second.get("k") is None
        assert await second.get_all() == []
        assert await first.get_all() == ["1"]

    async def test_delete_one(self, cache: NamespacedCache) -> None:
        assert await cache.delete_one("k") is False
        await cache.put("k", "v")
        assert await cache.delete_one("k") is True
        assert await cache.get("k") is None

    async def test_many_keys_pattern_delete(self, cache: NamespacedCache) -> None:
        for i in range(250):
            await cache.put(f"bulk{i}", str(i))
        await cache.put("other", "x")

        result = await cache.delete_by_pattern("bulk")

        assert len(result) == 250
        assert all(result.values())
        assert await cache.get_all() == ["x"]
