"""
Keyspace Cache — Key Namespace Tests
"""

import dataclasses

import pytest

from keyspace_cache.cache.keys import KeyNamespace
from keyspace_cache.errors import ConfigurationError, MalformedKeyError


def test_to_physical_prepends_prefix() -> None:
    assert KeyNamespace("T_").to_physical("a") == "T_a"


def test_to_logical_strips_prefix() -> None:
    assert KeyNamespace("T_").to_logical("T_ab") == "ab"


def test_round_trip_of_empty_logical_key() -> None:
    ns = KeyNamespace("T_")
    assert ns.to_logical(ns.to_physical("")) == ""


def test_to_logical_rejects_foreign_key() -> None:
    with pytest.raises(MalformedKeyError) as info:
        KeyNamespace("T_").to_logical("U_a")

    assert info.value.key == "U_a"
    assert info.value.namespace == "T_"


def test_scan_pattern_appends_wildcard() -> None:
    ns = KeyNamespace("T_")
    assert ns.scan_pattern() == "T_*"
    assert ns.scan_pattern("a") == "T_a*"


def test_scan_pattern_escapes_prefix_but_not_fragment() -> None:
    assert KeyNamespace("cfg[1]_").scan_pattern("a?") == "cfg\\[1\\]_a?*"


def test_empty_prefix_rejected() -> None:
    with pytest.raises(ConfigurationError):
        KeyNamespace("")


def test_namespace_is_immutable() -> None:
    ns = KeyNamespace("T_")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ns.prefix = "U_"  # type: ignore[misc]
