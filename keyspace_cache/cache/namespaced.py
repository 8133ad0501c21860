"""
Keyspace Cache — Namespaced Cache

Cache access layer in front of a shared store. Each instance owns one
namespace prefix and only ever reads, writes, scans or deletes keys under it.

Operations:
- get / get_multiple / get_all   read path
- put                            write path with a fixed, instance-wide TTL
- delete_one / delete_by_pattern delete path with per-key outcomes

Bulk operations issue their per-key store calls through a bounded pool
(max_concurrency in flight). No ordering or atomicity is promised across
keys; results are assembled positionally so every key gets its own outcome.

Example:
    async with NamespacedCache(MemoryStore(), namespace="T_") as cache:
        await cache.put("a", "1")
        await cache.get_multiple(["a", "zzz"])   # ["1", None]
        await cache.delete_by_pattern("a")       # {"T_a": True}
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from types import TracebackType
from typing import Any, TypeVar

from ..config import DEFAULT_TTL_SECONDS, KeyspaceConfig
from ..errors import StoreOperationError
from ..store import StoreInterface, create_store
from .keys import KeyNamespace

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class NamespacedCache:
    """
    Namespaced cache over a StoreInterface.

    Absent keys read as None. Store connection faults propagate to the
    caller unchanged; nothing is retried here.
    """

    def __init__(
        self,
        store: StoreInterface,
        namespace: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_concurrency: int = 16,
        physical_delete_keys: bool = True,
        owns_store: bool = False,
    ) -> None:
        """
        Initialize the cache.

        Args:
            store: Backing store binding, possibly shared with other namespaces
            namespace: Prefix prepended to every key
            ttl_seconds: TTL applied to every put
            max_concurrency: Max in-flight store calls per bulk operation
            physical_delete_keys: Key delete_by_pattern results by physical key
                (True) or by logical key (False)
            owns_store: Close the store when this cache is closed
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

        self._store = store
        self._keys = KeyNamespace(namespace)
        self.ttl_seconds = ttl_seconds
        self.max_concurrency = max_concurrency
        self.physical_delete_keys = physical_delete_keys
        self._owns_store = owns_store
        self._closed = False

        # Stats
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0
        self._delete_failures = 0

        logger.info(
            "Instantiated namespaced cache '%s' on %s store",
            namespace,
            store.backend_name,
            extra={"namespace": namespace, "backend": store.backend_name},
        )

    @classmethod
    def from_config(cls, config: KeyspaceConfig) -> NamespacedCache:
        """Build a cache and the store it owns from a loaded configuration."""
        store = create_store(config.store)
        return cls(
            store,
            namespace=config.cache.namespace,
            ttl_seconds=config.cache.ttl_seconds,
            max_concurrency=config.cache.max_concurrency,
            physical_delete_keys=config.cache.physical_delete_keys,
            owns_store=True,
        )

    @property
    def namespace(self) -> str:
        return self._keys.prefix

    @property
    def store(self) -> StoreInterface:
        return self._store

    # ------------ Helpers ------------

    async def _bounded(self, func: Callable[[T], Awaitable[R]], items: Sequence[T]) -> list[R]:
        """
        Run func over items with at most max_concurrency calls in flight, preserving order.

        If any call raises, the remaining calls are cancelled and awaited
        before the exception propagates, so nothing touches the store after
        the caller sees the failure.
        """
        if not items:
            return []
        limiter = asyncio.Semaphore(self.max_concurrency)

        async def run(item: T) -> R:
            async with limiter:
                return await func(item)

        tasks = [asyncio.ensure_future(run(item)) for item in items]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _scan_keys(self, pattern: str) -> list[str]:
        """Consume a scan fully: validated, deduplicated, in yield order."""
        seen: dict[str, None] = {}
        async for physical_key in self._store.scan(pattern):
            self._keys.to_logical(physical_key)
            seen.setdefault(physical_key, None)
        return list(seen)

    def _record_read(self, value: str | None) -> None:
        if value is None:
            self._misses += 1
        else:
            self._hits += 1

    async def _fetch(self, physical_key: str) -> str | None:
        value = await self._store.get(physical_key)
        self._record_read(value)
        return value

    async def _delete_tolerant(self, physical_key: str) -> bool:
        """Delete one scanned key; a rejected command counts as not deleted."""
        try:
            deleted = await self._store.delete(physical_key)
        except StoreOperationError as e:
            self._delete_failures += 1
            logger.warning(
                "Delete of '%s' failed, recording as not deleted: %s",
                physical_key,
                e,
                extra={"namespace": self.namespace, "key": physical_key, "error": str(e)},
            )
            return False
        if deleted:
            self._deletes += 1
        return deleted

    # ------------ Read path ------------

    async def get(self, key: str) -> str | None:
        """Return the value for key, or None if absent."""
        physical_key = self._keys.to_physical(key)
        logger.debug("Cache get %s", physical_key, extra={"namespace": self.namespace, "key": key})
        return await self._fetch(physical_key)

    async def get_multiple(self, keys: Sequence[str]) -> list[str | None]:
        """
        Return values for keys in input order, None where a key is absent.

        Each key is resolved independently; values may reflect different
        points in time if writes race with the read.
        """
        logger.debug(
            "Cache get multiple (%d keys)",
            len(keys),
            extra={"namespace": self.namespace, "key_count": len(keys)},
        )
        physical_keys = [self._keys.to_physical(key) for key in keys]
        return await self._bounded(self._fetch, physical_keys)

    async def get_all(self) -> list[str]:
        """
        Return every present value in the namespace, in scan order.

        Keys removed between the scan and the fetch are skipped, so unlike
        get_multiple the result never contains None.
        """
        physical_keys = await self._scan_keys(self._keys.scan_pattern())
        values = await self._bounded(self._fetch, physical_keys)
        present = [value for value in values if value is not None]
        logger.info(
            "Cache get all: %d keys scanned, %d values present",
            len(physical_keys),
            len(present),
            extra={"namespace": self.namespace, "scanned": len(physical_keys), "present": len(present)},
        )
        return present

    # ------------ Write path ------------

    async def put(self, key: str, value: str) -> None:
        """Store value under key with the instance TTL. Last writer wins."""
        physical_key = self._keys.to_physical(key)
        logger.debug(
            "Cache put %s",
            physical_key,
            extra={"namespace": self.namespace, "key": key, "ttl": self.ttl_seconds},
        )
        await self._store.set_with_ttl(physical_key, value, self.ttl_seconds)
        self._sets += 1

    # ------------ Delete path ------------

    async def delete_one(self, key: str) -> bool:
        """Delete key; True only if it existed and was removed."""
        physical_key = self._keys.to_physical(key)
        logger.debug("Cache delete %s", physical_key, extra={"namespace": self.namespace, "key": key})
        deleted = await self._store.delete(physical_key)
        if deleted:
            self._deletes += 1
        return deleted

    async def delete_by_pattern(self, fragment: str) -> dict[str, bool]:
        """
        Delete every key starting with namespace + fragment.

        The fragment may contain glob syntax; a trailing wildcard is always
        appended. Each matched key is deleted independently with no rollback,
        and the returned mapping records the outcome per key. Keys are
        physical (prefixed) unless physical_delete_keys is False.

        Raises:
            MalformedKeyError: If the scan yields a key outside the namespace
            StoreConnectionError: If the store becomes unreachable
        """
        pattern = self._keys.scan_pattern(fragment)
        physical_keys = await self._scan_keys(pattern)
        outcomes = await self._bounded(self._delete_tolerant, physical_keys)

        if self.physical_delete_keys:
            result = dict(zip(physical_keys, outcomes, strict=True))
        else:
            result = {self._keys.to_logical(k): ok for k, ok in zip(physical_keys, outcomes, strict=True)}

        deleted = sum(outcomes)
        logger.info(
            "Cache delete by pattern %s: %d matched, %d deleted",
            pattern,
            len(physical_keys),
            deleted,
            extra={
                "namespace": self.namespace,
                "pattern": pattern,
                "matched": len(physical_keys),
                "deleted": deleted,
            },
        )
        return result

    # ------------ Lifecycle & stats ------------

    async def get_stats(self) -> dict[str, Any]:
        """Return per-instance operation counters."""
        total_reads = self._hits + self._misses
        return {
            "backend": self._store.backend_name,
            "namespace": self.namespace,
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total_reads * 100, 2) if total_reads else 0.0,
            "sets": self._sets,
            "deletes": self._deletes,
            "delete_failures": self._delete_failures,
        }

    async def close(self) -> None:
        """Release the store if this cache owns it. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if self._owns_store:
            await self._store.close()
        logger.info("Closed namespaced cache '%s'", self.namespace, extra={"namespace": self.namespace})

    async def __aenter__(self) -> NamespacedCache:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
