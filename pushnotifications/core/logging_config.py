"""
Logging setup for processes that use the Beams client.

The client itself only emits records through module loggers with
``extra={...}`` fields. ``setup_logging`` is for scripts and services that
want those records as JSON lines on stderr.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Optional
from pythonjsonlogger import jsonlogger

from pushnotifications import __version__
from pushnotifications.core.config import get_settings

_LINE_BREAK = re.compile(r'\r\n|\r|\n')

JSON_FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _flatten(text: str) -> str:
    return _LINE_BREAK.sub(' ', text)


class SanitizingFilter(logging.Filter):
    """
    Collapse line breaks in messages and string args into spaces.

    User ids and interests are caller supplied, so a CR/LF inside one
    must not start a new log line.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _flatten(record.msg)

        if isinstance(record.args, tuple):
            record.args = tuple(
                _flatten(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for client log records.

    Example entry:
    {
        "timestamp": "2025-11-23T10:30:00.000000+00:00",
        "level": "INFO",
        "message": "Beams publish accepted",
        "logger": "pushnotifications.client",
        "module": "client",
        "client_version": "2.0.0",
        "publish_id": "pubid-33f3f68e-b0c5-438f-b50f-fae93f6c48df",
        "target_type": "interests",
        ...
    }
    """

    def add_fields(
        self,
        log_record: dict,
        record: logging.LogRecord,
        message_dict: dict
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record.setdefault('timestamp', datetime.now(timezone.utc).isoformat())
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['client_version'] = __version__
        log_record.setdefault('message', record.getMessage())


def setup_logging(
    log_level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> logging.Logger:
    """
    Send all records to a single stderr handler.

    Replaces any handlers already on the root logger, so call it once at
    process start.

    Args:
        log_level: Level name (default settings.LOG_LEVEL)
        json_format: JSON lines if true, plain text otherwise (default settings.LOG_JSON)

    Returns:
        The root logger
    """
    if log_level is None:
        log_level = get_settings().LOG_LEVEL
    if json_format is None:
        json_format = get_settings().LOG_JSON

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(SanitizingFilter())
    handler.setFormatter(
        CustomJsonFormatter(JSON_FORMAT) if json_format else logging.Formatter(PLAIN_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # httpx logs every request at INFO
    for name in ('httpx', 'httpcore'):
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def sanitize_log_value(value, max_length: int = 200) -> str:
    """Flatten and truncate a caller-supplied value before it goes in a log extra."""
    text = _flatten(value if isinstance(value, str) else str(value))
    if len(text) > max_length:
        text = text[:max_length] + '...[truncated]'
    return text
