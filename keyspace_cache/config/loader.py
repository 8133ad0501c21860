"""
Keyspace Cache — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Each call builds a fresh KeyspaceConfig; callers pass it on explicitly.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import Environment, KeyspaceConfig

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Environment variable {name} must be an integer, got {raw!r}",
            details={"env": name, "value": raw},
        ) from e


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Environment variable {name} must be a number, got {raw!r}",
            details={"env": name, "value": raw},
        ) from e


def _resolve_environment() -> Environment:
    raw = os.getenv("ENVIRONMENT", Environment.LOCAL.value)
    environment = Environment.from_name(raw)
    if environment is None:
        raise ConfigurationError(
            f"Unknown environment provided: [{raw}]",
            details={"env": "ENVIRONMENT", "value": raw, "supported": [e.value for e in Environment]},
        )
    return environment


def load_config(env_file: str | None = None) -> KeyspaceConfig:
    """
    Load configuration from environment variables and an optional .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)

    Returns:
        Validated KeyspaceConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info("Loading environment from %s", env_path)
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                "Failed to load .env file from %s: %s",
                env_path,
                e,
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    # Auto-detect store backend: redis if node addresses are given, else memory
    nodes = [n.strip() for n in os.getenv("STORE_NODES", "").split(",") if n.strip()]
    store_backend = "redis" if nodes else "memory"

    config_dict: dict[str, Any] = {
        "environment": _resolve_environment(),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "log_format": os.getenv("LOG_FORMAT", "text").lower(),
        "store": {
            "backend": os.getenv("STORE_BACKEND", store_backend).lower(),
            "nodes": nodes,
            "database": _env_int("STORE_DATABASE", "0"),
            "max_connections": _env_int("STORE_MAX_CONNECTIONS", "10"),
            "socket_timeout": _env_float("STORE_SOCKET_TIMEOUT", "5"),
            "scan_count": _env_int("STORE_SCAN_COUNT", "500"),
            "read_from_replicas": _env_bool("STORE_READ_FROM_REPLICAS", "false"),
        },
        "cache": {
            "namespace": os.getenv("CACHE_NAMESPACE", "keyspace_"),
            "ttl_seconds": _env_int("CACHE_TTL_SECONDS", "86400"),
            "max_concurrency": _env_int("CACHE_MAX_CONCURRENCY", "16"),
            "physical_delete_keys": _env_bool("CACHE_PHYSICAL_DELETE_KEYS", "true"),
        },
    }

    try:
        config = KeyspaceConfig(**config_dict)
    except ValidationError as e:
        logger.error(
            "Configuration validation failed: %s",
            e,
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables.",
            details={"validation_errors": e.errors()},
        ) from e

    logger.info(
        "Configuration loaded (environment: %s)",
        config.environment.value,
        extra={
            "environment": config.environment.value,
            "store_backend": config.store.backend.value,
            "namespace": config.cache.namespace,
        },
    )
    return config
