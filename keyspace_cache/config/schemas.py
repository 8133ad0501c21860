"""
Keyspace Cache — Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
Configuration is validated once at startup and handed to constructors explicitly;
there is no process-wide configuration holder.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NODE_SCHEMES = ("redis", "rediss")
DEFAULT_TTL_SECONDS = 24 * 60 * 60


class Environment(str, Enum):
    """Deployment environment the process runs in."""

    LOCAL = "local"
    DEV = "dev"
    QA = "qa"
    UAT = "uat"
    PROD = "prod"

    @classmethod
    def from_name(cls, name: str | None) -> Environment | None:
        """Case-insensitive lookup; returns None for unknown or missing names."""
        if name is None:
            return None
        return _ENVIRONMENTS_BY_NAME.get(name.strip().lower())


# Built once at import, never mutated
_ENVIRONMENTS_BY_NAME = MappingProxyType(
    {**{env.value: env for env in Environment}, **{env.name.lower(): env for env in Environment}}
)


class StoreBackend(str, Enum):
    """Supported store backends."""

    MEMORY = "memory"
    REDIS = "redis"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    TEXT = "text"
    JSON = "json"


class StoreConfig(BaseModel):
    """Backing store connection configuration."""

    backend: StoreBackend = Field(default=StoreBackend.MEMORY, description="Store backend to use")
    nodes: list[str] = Field(
        default_factory=list,
        description="Node addresses, first is the primary. Format: redis://host:port",
    )
    database: int = Field(default=0, ge=0, le=15, description="Redis logical database index")
    max_connections: int = Field(default=10, ge=1, description="Connection pool size per node")
    socket_timeout: float = Field(default=5.0, gt=0, description="Socket timeout in seconds")
    scan_count: int = Field(default=500, ge=1, description="SCAN batch size hint")
    read_from_replicas: bool = Field(default=False, description="Serve single-key reads from replica nodes")

    @field_validator("nodes")
    @classmethod
    def validate_nodes(cls, v: list[str]) -> list[str]:
        """Ensure every node address has a supported scheme, a host and a port."""
        cleaned = []
        for address in v:
            address = address.strip()
            if not address:
                continue
            parts = urlsplit(address)
            if parts.scheme not in NODE_SCHEMES:
                raise ValueError(f"Unsupported node scheme in {address!r}, expected one of {NODE_SCHEMES}")
            try:
                port = parts.port
            except ValueError as e:
                raise ValueError(f"Invalid port in node address {address!r}") from e
            if not parts.hostname or port is None:
                raise ValueError(f"Node address {address!r} must have the form scheme://host:port")
            cleaned.append(address)
        return cleaned

    @model_validator(mode="after")
    def validate_backend_nodes(self) -> StoreConfig:
        """Ensure the redis backend has somewhere to connect."""
        if self.backend == StoreBackend.REDIS and not self.nodes:
            raise ValueError("at least one node address is required when store backend is 'redis'")
        return self


class CacheConfig(BaseModel):
    """Namespaced cache layer configuration."""

    namespace: str = Field(default="keyspace_", min_length=1, description="Prefix prepended to every key")
    ttl_seconds: int = Field(default=DEFAULT_TTL_SECONDS, ge=1, description="TTL applied to every write")
    max_concurrency: int = Field(default=16, ge=1, description="Max in-flight store calls per bulk operation")
    physical_delete_keys: bool = Field(
        default=True,
        description="Key delete_by_pattern results by physical (prefixed) key instead of logical key",
    )


class KeyspaceConfig(BaseModel):
    """Root configuration for Keyspace Cache."""

    environment: Environment = Field(default=Environment.LOCAL, description="Deployment environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.TEXT, description="Logging output format")

    store: StoreConfig = Field(default_factory=StoreConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v: Any) -> Any:
        """Accept environment names in any case (e.g. 'LOCAL')."""
        if isinstance(v, str):
            return Environment.from_name(v) or v
        return v

    model_config = ConfigDict(frozen=True)
