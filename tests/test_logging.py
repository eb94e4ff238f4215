"""
Tests for the bytecache logging helpers.
"""

import json
import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from bytecache.cache_store import LRUCache
from bytecache.utils.logging import (
    initialize_logging,
    shutdown_logging,
    get_logger,
    get_adapter,
    CacheEventLogger,
)
from bytecache.utils.logging_config import (
    LoggingPresets,
    configure_from_environment,
    get_logging_config
)


class TestLoggingSystem:
    """Test the logging system functionality."""

    def setup_method(self):
        """Set up test environment."""
        shutdown_logging()
        self.temp_dir = tempfile.mkdtemp()
        self.log_file = Path(self.temp_dir) / "test.log"

    def teardown_method(self):
        """Clean up test environment."""
        import shutil
        shutdown_logging()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def read_records(self):
        with open(self.log_file, 'r') as f:
            return [json.loads(line) for line in f if line.strip()]

    def test_basic_logging_initialization(self):
        """Test basic logging initialization."""
        log_manager = initialize_logging(
            log_level="DEBUG",
            log_format="json",
            log_file=str(self.log_file)
        )

        assert log_manager is not None
        assert log_manager.log_level == 10  # DEBUG level

        logger = get_logger("test.basic")
        logger.info("Test message", extra={"test_field": "test_value"})

        assert self.log_file.exists()
        log_data = self.read_records()[0]

        assert log_data["level"] == "INFO"
        assert log_data["logger"] == "bytecache.test.basic"
        assert log_data["message"] == "Test message"
        assert log_data["test_field"] == "test_value"

    def test_initialize_is_idempotent(self):
        first = initialize_logging(log_level="DEBUG")
        second = initialize_logging(log_level="ERROR")
        assert first is second

    def test_logger_adapter_bind(self):
        initialize_logging(log_level="DEBUG", log_file=str(self.log_file))

        adapter = get_adapter("test.adapter", service="test_service")
        adapter.bind(node="node-1").info("Adapter test message")

        log_data = self.read_records()[0]
        assert log_data["service"] == "test_service"
        assert log_data["node"] == "node-1"

    def test_cache_events_are_logged(self):
        initialize_logging(log_level="DEBUG", log_file=str(self.log_file))

        cache = LRUCache(max_bytes=2, name="events")
        cache.add("a", b"")
        cache.get("a")
        cache.get("missing")
        cache.add("b", b"")
        cache.add("c", b"")

        events = [r for r in self.read_records() if r.get("cache_name") == "events"]
        assert [e["event_type"] for e in events] == ["cache_hit", "cache_miss", "cache_eviction"]
        assert events[-1]["cache_key"] == "a"
        assert events[-1]["entry_bytes"] == 1

    def test_cache_events_skipped_above_debug(self):
        initialize_logging(log_level="INFO", log_file=str(self.log_file))

        cache = LRUCache(max_bytes=1)
        cache.add("a", b"")
        cache.add("b", b"")
        cache.get("b")

        assert self.read_records() == []

    def test_text_format(self):
        initialize_logging(log_level="INFO", log_format="text", log_file=str(self.log_file))
        get_logger("test.text").warning("plain message")

        content = self.log_file.read_text()
        assert "bytecache.test.text - WARNING - plain message" in content

    def test_exception_info_is_structured(self):
        initialize_logging(log_level="INFO", log_file=str(self.log_file))
        try:
            raise RuntimeError("failure")
        except RuntimeError:
            get_logger("test.exc").exception("Operation failed")

        log_data = self.read_records()[0]
        assert log_data["exception"]["type"] == "RuntimeError"
        assert log_data["exception"]["message"] == "failure"

    def test_shutdown_removes_handlers(self):
        initialize_logging(log_level="INFO", log_file=str(self.log_file))
        package_logger = logging.getLogger("bytecache")
        assert len(package_logger.handlers) == 2

        shutdown_logging()
        assert package_logger.handlers == []
        assert get_logging_config() == {"status": "not_initialized"}


class TestLoggingConfig:
    """Test presets and environment configuration."""

    def setup_method(self):
        shutdown_logging()

    def teardown_method(self):
        shutdown_logging()

    def test_development_preset(self):
        manager = LoggingPresets.development()
        assert manager.log_level == logging.DEBUG
        assert manager.log_format == "json"

    def test_production_preset(self):
        manager = LoggingPresets.production()
        assert manager.log_level == logging.INFO
        assert manager.log_format == "json"
        assert manager.max_bytes == 50 * 1024 * 1024
        assert manager.backup_count == 10

    def test_testing_preset(self):
        manager = LoggingPresets.testing()
        assert manager.log_level == logging.WARNING
        assert manager.log_format == "text"

    def test_configure_from_environment(self):
        env = {
            "BYTECACHE_LOG_LEVEL": "ERROR",
            "BYTECACHE_LOG_FORMAT": "text",
            "BYTECACHE_LOG_BACKUP_COUNT": "2",
        }
        with patch.dict("os.environ", env):
            configure_from_environment()

        config = get_logging_config()
        assert config["status"] == "initialized"
        assert config["log_level"] == logging.ERROR
        assert config["log_format"] == "text"
        assert config["backup_count"] == 2
        assert config["log_file"] is None


def test_get_logger_namespaces_names():
    assert get_logger("custom").name == "bytecache.custom"
    assert get_logger("bytecache.cache_store.lru").name == "bytecache.cache_store.lru"


def test_event_logger_respects_level(caplog):
    logger = logging.getLogger("bytecache.test.events")
    events = CacheEventLogger(logger, cache_name="unit")

    with caplog.at_level(logging.DEBUG, logger="bytecache.test.events"):
        assert events.enabled
        events.log_eviction("k", 12)

    record = caplog.records[-1]
    assert record.getMessage() == "Cache eviction"
    assert record.extra_fields["entry_bytes"] == 12
    assert record.extra_fields["cache_name"] == "unit"
