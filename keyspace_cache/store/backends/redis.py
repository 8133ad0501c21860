"""
Keyspace Cache — Redis Store

Asynchronous Redis store binding with:
- JSON-encoded values (compatible with JSON-codec clients sharing the store)
- Per-write TTL via SET EX
- Cursor-based SCAN for pattern enumeration
- Primary/replica node list: every command goes to the first node,
  single-key reads can be spread over the remaining nodes

Requires: redis>=5.0 with asyncio support

Example:
    store = RedisStore(nodes=["redis://localhost:6379"], database=0)
    await store.set_with_ttl("app_greeting", "hello", 60)
    val = await store.get("app_greeting")
"""

from __future__ import annotations

import itertools
import json
import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager

from ...errors import StoreConnectionError, StoreOperationError
from ..interface import StoreInterface

logger = logging.getLogger(__name__)

try:
    # redis-py asyncio client (v4.2+)
    from redis.asyncio import Redis
    from redis.exceptions import ConnectionError as RedisConnectionError
    from redis.exceptions import RedisError
    from redis.exceptions import TimeoutError as RedisTimeoutError
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis async client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or add 'redis' to your dependencies."
    ) from e


class RedisStore(StoreInterface):
    """
    Redis store backend.

    Notes:
    - Keys are used verbatim; callers supply physical (namespaced) keys.
    - Values are stored as UTF-8 JSON strings.
    - Connection faults raise StoreConnectionError, rejected commands
      raise StoreOperationError. Nothing is retried here.
    """

    backend_name = "redis"

    def __init__(
        self,
        nodes: list[str],
        database: int = 0,
        max_connections: int = 10,
        socket_timeout: float = 5.0,
        scan_count: int = 500,
        read_from_replicas: bool = False,
    ) -> None:
        """
        Initialize Redis store.

        Args:
            nodes: Node URLs, e.g. ["redis://primary:6379", "redis://replica:6379"]
            database: Logical database index
            max_connections: Connection pool size per node
            socket_timeout: Socket timeout in seconds
            scan_count: COUNT hint passed to SCAN
            read_from_replicas: Serve get() from replica nodes in round-robin
        """
        if not nodes:
            raise ValueError("at least one node address is required")

        self.nodes = list(nodes)
        self.database = database
        self.scan_count = scan_count

        # Lazy connections; each client connects on its first command
        self._clients: list[Redis] = [
            Redis.from_url(  # type: ignore[call-overload]
                url=address,
                db=database,
                decode_responses=True,
                max_connections=max_connections,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
            )
            for address in self.nodes
        ]
        self._primary = self._clients[0]
        replicas = self._clients[1:]
        self._readers: Iterator[Redis] | None = (
            itertools.cycle(replicas) if read_from_replicas and replicas else None
        )

    # ------------ Helpers ------------

    @contextmanager
    def _translate_errors(self, operation: str, key: str) -> Iterator[None]:
        """Map redis-py exceptions onto the store error types."""
        try:
            yield
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.error(
                "Redis %s failed for '%s': connection fault: %s",
                operation,
                key,
                e,
                extra={"operation": operation, "key": key, "nodes": self.nodes, "error": str(e)},
            )
            raise StoreConnectionError(
                self.backend_name,
                details={"operation": operation, "key": key, "nodes": self.nodes, "error": str(e)},
            ) from e
        except RedisError as e:
            logger.warning(
                "Redis %s rejected for '%s': %s",
                operation,
                key,
                e,
                extra={"operation": operation, "key": key, "error": str(e)},
            )
            raise StoreOperationError(
                f"Redis {operation} failed for key '{key}': {e}",
                details={"operation": operation, "key": key, "error": str(e)},
            ) from e

    def _reader(self) -> Redis:
        if self._readers is None:
            return self._primary
        return next(self._readers)

    @staticmethod
    def _to_json(value: str) -> str:
        """Serialize value to JSON string."""
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _from_json(data: str | bytes | None) -> str | None:
        """Deserialize a stored JSON string. Returns None if data is None."""
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        try:
            decoded = json.loads(data)
        except ValueError as e:
            # Written by a client that stores raw strings
            logger.warning(
                "Failed to decode JSON from store, returning raw data: %s",
                e,
                extra={"data_preview": data[:100], "error": str(e)},
            )
            return data
        return decoded if isinstance(decoded, str) else data

    # ------------ Core Interface ------------

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key."""
        with self._translate_errors("get", key):
            data = await self._reader().get(key)
        return self._from_json(data)

    async def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ttl_seconds."""
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        payload = self._to_json(value)
        with self._translate_errors("set", key):
            await self._primary.set(name=key, value=payload, ex=ttl_seconds)

    async def delete(self, key: str) -> bool:
        """Delete a single key."""
        with self._translate_errors("delete", key):
            deleted = await self._primary.delete(key)
        return bool(deleted)

    async def scan(self, pattern: str) -> AsyncIterator[str]:
        """Iterate keys matching pattern with SCAN MATCH (may repeat keys)."""
        with self._translate_errors("scan", pattern):
            async for key in self._primary.scan_iter(match=pattern, count=self.scan_count):
                yield key.decode("utf-8") if isinstance(key, bytes) else key

    async def ping(self) -> bool:
        with self._translate_errors("ping", ""):
            return bool(await self._primary.ping())

    async def close(self) -> None:
        """Close every node client; aclose() also releases each client's own pool."""
        for address, client in zip(self.nodes, self._clients, strict=True):
            try:
                await client.aclose()
            except (RedisError, OSError) as e:
                logger.warning(
                    "Error closing Redis client for %s: %s",
                    address,
                    e,
                    extra={"node": address, "error": str(e)},
                )
        logger.info("Closed Redis store", extra={"nodes": self.nodes})
