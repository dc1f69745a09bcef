"""Tests for logging setup and correlation ID tracing."""

import logging

import pytest

from volscan.utils.logging import setup_logging
from volscan.utils.tracing import (
    CorrelationIdFilter,
    correlation_id,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestTracing:
    """Tests for correlation ID helpers."""

    def test_filter_adds_short_id(self):
        token = set_correlation_id("1234567890abcdef")
        try:
            record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
            assert CorrelationIdFilter().filter(record)
            assert record.correlation_id == "12345678"
        finally:
            correlation_id.reset(token)

    def test_filter_without_id(self):
        token = set_correlation_id(None)
        try:
            record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
            CorrelationIdFilter().filter(record)
            assert record.correlation_id == "-"
        finally:
            correlation_id.reset(token)

    def test_get_creates_once(self):
        token = set_correlation_id(None)
        try:
            first = get_correlation_id()
            assert get_correlation_id() == first
        finally:
            correlation_id.reset(token)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "volscan.log"

        setup_logging(level="DEBUG", log_file=log_file, console_output=False)
        logging.getLogger("volscan.test").info("hello")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert restore_root_logger.level == logging.DEBUG
        assert "hello" in log_file.read_text()

    def test_quiets_aiohttp(self, restore_root_logger):
        setup_logging(level="DEBUG", console_output=False)

        assert logging.getLogger("aiohttp").level == logging.WARNING
