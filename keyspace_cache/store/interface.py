"""
Keyspace Cache — Store Interface

Defines the narrow capability interface every backing store must implement.
Keys passed to a store are physical keys; namespacing happens above this layer.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class StoreInterface(ABC):
    """
    Abstract base class for backing key-value stores.

    Implementations raise StoreConnectionError when the store cannot be
    reached and StoreOperationError when it rejects a single command.
    They never retry internally.
    """

    backend_name: str = "abstract"

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """
        Retrieve a value.

        Args:
            key: Physical key

        Returns:
            Stored value, or None if the key is absent or expired
        """
        pass

    @abstractmethod
    async def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        """
        Store a value that expires after ``ttl_seconds``.

        Args:
            key: Physical key
            value: Value to store
            ttl_seconds: Time-to-live in seconds (must be positive)
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a key.

        Args:
            key: Physical key

        Returns:
            True if the key existed and was removed, False otherwise
        """
        pass

    @abstractmethod
    def scan(self, pattern: str) -> AsyncIterator[str]:
        """
        Lazily enumerate physical keys matching a glob pattern.

        The iterator is one-shot; scanning again issues a new query.
        A key may be yielded more than once.

        Args:
            pattern: Redis-style glob pattern
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the store answers."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Close the store and release resources.

        Should be called during graceful shutdown.
        """
        pass
