"""
Keyspace Cache — Logging Setup Tests
"""

import json
import logging
from collections.abc import Generator

import pytest

from keyspace_cache.logging_config import JSONFormatter, configure_logging


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("keyspace_cache.test", logging.INFO, __file__, 10, "put %s", ("T_a",), None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    payload = json.loads(JSONFormatter().format(_record(namespace="T_", key="a")))

    assert payload["message"] == "put T_a"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "keyspace_cache.test"
    assert payload["namespace"] == "T_"
    assert payload["key"] == "a"
    assert "args" not in payload


def test_json_formatter_serializes_unknown_types() -> None:
    payload = json.loads(JSONFormatter().format(_record(nodes={"redis://a:6379"})))
    assert payload["nodes"] == "{'redis://a:6379'}"


def test_configure_json_logging(restore_root_logger: logging.Logger) -> None:
    configure_logging("debug", "json")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


def test_configure_text_logging(restore_root_logger: logging.Logger) -> None:
    configure_logging("WARNING")

    assert restore_root_logger.level == logging.WARNING
    assert not isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
