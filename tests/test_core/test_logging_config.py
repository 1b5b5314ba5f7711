"""
Unit tests for logging configuration
"""
import json
import logging
from io import StringIO

import pytest

from pushnotifications import __version__
from pushnotifications.core.logging_config import (
    setup_logging,
    sanitize_log_value,
    CustomJsonFormatter,
    SanitizingFilter,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def make_record(msg, args=()):
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None
    )


class TestSanitizingFilter:
    """Test log sanitization filter"""

    def test_filter_removes_newlines(self):
        """Filter should remove newline characters"""
        record = make_record("Line 1\nLine 2\nLine 3")

        SanitizingFilter().filter(record)

        assert record.msg == "Line 1 Line 2 Line 3"

    def test_filter_removes_crlf(self):
        """Filter should remove CRLF sequences"""
        record = make_record("Line 1\r\nLine 2")

        SanitizingFilter().filter(record)

        assert record.msg == "Line 1 Line 2"

    def test_filter_sanitizes_args(self):
        """Filter should sanitize string args"""
        record = make_record("User id: %s", ("malicious\ninjection",))

        SanitizingFilter().filter(record)

        assert "\n" not in record.args[0]


class TestCustomJsonFormatter:
    """Test JSON log output"""

    def test_standard_fields(self):
        """Formatted records carry level, logger, module and extra fields"""
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
        record = make_record("Beams publish accepted")
        record.publish_id = "pub-123"

        output = json.loads(formatter.format(record))

        assert output["level"] == "INFO"
        assert output["logger"] == "test"
        assert output["message"] == "Beams publish accepted"
        assert output["publish_id"] == "pub-123"
        assert output["client_version"] == __version__
        assert "timestamp" in output


class TestSetupLogging:
    """Test setup_logging"""

    def test_json_handler(self, restore_root_logger):
        root_logger = setup_logging(log_level="DEBUG", json_format=True)

        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, CustomJsonFormatter)

    def test_plain_handler(self, restore_root_logger):
        root_logger = setup_logging(log_level="WARNING", json_format=False)

        assert root_logger.level == logging.WARNING
        assert not isinstance(root_logger.handlers[0].formatter, CustomJsonFormatter)

    def test_quiets_httpx(self, restore_root_logger):
        setup_logging(log_level="DEBUG", json_format=True)

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_output_is_json(self, restore_root_logger):
        root_logger = setup_logging(log_level="INFO", json_format=True)
        stream = StringIO()
        root_logger.handlers[0].setStream(stream)

        logging.getLogger("pushnotifications.test").info("hello\nworld")

        output = json.loads(stream.getvalue().strip())
        assert output["message"] == "hello world"


class TestSanitizeLogValue:
    """Test sanitize_log_value helper function"""

    def test_sanitize_removes_newlines(self):
        assert sanitize_log_value("hello\nworld") == "hello world"

    def test_sanitize_truncates_long_strings(self):
        result = sanitize_log_value("a" * 500)

        assert len(result) < 500
        assert "[truncated]" in result

    def test_sanitize_handles_non_strings(self):
        assert sanitize_log_value(12345) == "12345"
