"""
Keyspace Cache — Memory Store

In-process store with per-key TTL and Redis-compatible glob scans.
Safe for concurrent use from one event loop and shareable between
several namespaced caches, which makes it the default for tests and local runs.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator

from ...errors import StoreConnectionError
from ..glob import compile_glob
from ..interface import StoreInterface

logger = logging.getLogger(__name__)


class MemoryStore(StoreInterface):
    """
    In-memory store backend.

    Features:
    - Per-key expiry, checked lazily on access
    - Glob scans over a snapshot taken when iteration starts
    - Raises StoreConnectionError once closed, like a dropped connection
    """

    backend_name = "memory"

    def __init__(self) -> None:
        # key -> (value, expiry on the monotonic clock)
        self._data: dict[str, tuple[str, float]] = {}
        self._lock = asyncio.Lock()
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreConnectionError(self.backend_name, details={"reason": "store closed"})

    @staticmethod
    def _is_expired(expiry: float) -> bool:
        return time.monotonic() >= expiry

    async def get(self, key: str) -> str | None:
        """Retrieve value from the store."""
        self._ensure_open()
        async with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None

            value, expiry = entry
            if self._is_expired(expiry):
                del self._data[key]
                return None
            return value

    async def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value with expiry."""
        self._ensure_open()
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        async with self._lock:
            self._data[key] = (value, time.monotonic() + ttl_seconds)

    async def delete(self, key: str) -> bool:
        """Delete key from the store."""
        self._ensure_open()
        async with self._lock:
            entry = self._data.pop(key, None)
            if entry is None:
                return False
            # An expired entry counts as already gone
            return not self._is_expired(entry[1])

    async def scan(self, pattern: str) -> AsyncIterator[str]:
        """Yield live keys matching ``pattern``."""
        self._ensure_open()
        matcher = compile_glob(pattern)
        async with self._lock:
            snapshot = [key for key, (_, expiry) in self._data.items() if not self._is_expired(expiry)]

        for key in snapshot:
            if matcher.match(key):
                yield key

    async def ping(self) -> bool:
        return not self._closed

    async def close(self) -> None:
        """Mark the store closed; stored data is dropped."""
        async with self._lock:
            self._data.clear()
            self._closed = True
        logger.debug("Memory store closed")

    def __len__(self) -> int:
        return len(self._data)
