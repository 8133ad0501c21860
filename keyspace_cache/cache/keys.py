"""
Keyspace Cache — Key Namespace

Maps logical keys to physical keys by prefixing them with an instance-scoped
namespace. Every key a cache touches passes through here.
"""

from dataclasses import dataclass

from ..errors import ConfigurationError, MalformedKeyError
from ..store.glob import escape_glob

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class KeyNamespace:
    """Immutable key prefix for one logical keyspace."""

    prefix: str

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ConfigurationError("Namespace prefix must not be empty", details={"prefix": self.prefix})

    def to_physical(self, logical_key: str) -> str:
        return self.prefix + logical_key

    def to_logical(self, physical_key: str) -> str:
        """Strip the prefix, failing fast on keys from another namespace."""
        if not physical_key.startswith(self.prefix):
            raise MalformedKeyError(physical_key, self.prefix)
        return physical_key[len(self.prefix) :]

    def scan_pattern(self, fragment: str = "") -> str:
        """
        Glob matching every physical key that starts with prefix + fragment.

        The prefix is escaped so it is matched literally; the fragment is
        passed through as a pattern and the trailing wildcard is implicit.
        """
        return escape_glob(self.prefix) + fragment + WILDCARD
