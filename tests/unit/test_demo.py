"""
Keyspace Cache — Demo Runner Tests
"""

import pytest

from keyspace_cache.__main__ import run_demo
from keyspace_cache.cache import NamespacedCache
from keyspace_cache.store.backends.memory import MemoryStore


async def test_demo_walkthrough(memory_store: MemoryStore, caplog: pytest.LogCaptureFixture) -> None:
    cache = NamespacedCache(memory_store, namespace="Testing_")
    await cache.put("Demo_extra", "kept until pattern delete")

    with caplog.at_level("INFO", logger="keyspace_cache"):
        deleted_map = await run_demo(cache)

    assert deleted_map == {"Testing_Demo_extra": True}
    assert await cache.get_all() == []
    assert "Deleted successfully = True" in caplog.text
