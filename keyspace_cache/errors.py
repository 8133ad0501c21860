"""
Keyspace Cache - Core Error Types

Defines the exception hierarchy for the cache layer and its store bindings.
All exceptions inherit from KeyspaceError for consistent error handling.

Store failures are split in two:
- StoreConnectionError: the store is unreachable or timed out (fatal for the call)
- StoreOperationError: the store answered but rejected a single command
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes attached to serialized errors.

    Used for structured error handling and caller-side error recovery.
    """

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_OPERATION_FAILED = "STORE_OPERATION_FAILED"
    MALFORMED_KEY = "MALFORMED_KEY"
    CACHE_FAILURE = "CACHE_FAILURE"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class KeyspaceError(Exception):
    """Base exception for all Keyspace Cache errors."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging or API responses."""
        return {
            "error": self.__class__.__name__,
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(KeyspaceError):
    """Raised when configuration is invalid or missing."""

    error_code = ErrorCode.CONFIGURATION_ERROR


class CacheError(KeyspaceError):
    """Base exception for cache-related errors."""

    error_code = ErrorCode.CACHE_FAILURE


class StoreError(CacheError):
    """Base exception for failures reported by a store binding."""


class StoreConnectionError(StoreError):
    """Raised when the backing store cannot be reached."""

    error_code = ErrorCode.STORE_UNAVAILABLE

    def __init__(self, backend: str, details: dict[str, Any] | None = None):
        message = f"Failed to reach store backend: {backend}"
        super().__init__(message, details)
        self.backend = backend


class StoreOperationError(StoreError):
    """Raised when the store rejects a single command."""

    error_code = ErrorCode.STORE_OPERATION_FAILED


class MalformedKeyError(CacheError):
    """Raised when a physical key lies outside the instance's namespace."""

    error_code = ErrorCode.MALFORMED_KEY

    def __init__(self, key: str, namespace: str):
        message = f"Key {key!r} is outside namespace {namespace!r}"
        super().__init__(message, {"key": key, "namespace": namespace})
        self.key = key
        self.namespace = namespace


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract the appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        ErrorCode for the exception (INTERNAL_ERROR for foreign exceptions)
    """
    if isinstance(error, KeyspaceError):
        return error.error_code
    return ErrorCode.INTERNAL_ERROR
