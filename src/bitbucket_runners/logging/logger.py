"""Structured logging for the runner client.

Usage:
    from bitbucket_runners.config import LoggingConfig
    from bitbucket_runners.logging import configure_logging

    configure_logging(LoggingConfig(level=LogLevel.DEBUG))
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from bitbucket_runners.config import LogFormat, LoggingConfig

ROOT_LOGGER_NAME = "bitbucket_runners"

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "taskName",
    )
)


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter.

    Formats log records as JSON with:
    - timestamp (ISO 8601, UTC)
    - level
    - component (logger name)
    - message
    - exception (if any)
    - Additional fields from extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def configure_logging(config: LoggingConfig | None = None, stream: TextIO | None = None) -> logging.Logger:
    """Install a single handler on the package logger.

    Calling it again replaces the previous handler, so it is safe on reload.

    Args:
        config: Logging configuration (defaults to LoggingConfig())
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package logger
    """
    config = config or LoggingConfig()

    handler = logging.StreamHandler(stream or sys.stderr)
    if config.format == LogFormat.JSON:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(config.level.value)
    package_logger.propagate = False

    return package_logger
