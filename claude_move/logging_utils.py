"""
Logging setup for the claude-move command line tool.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. The CLI calls ``configure_logging`` once,
choosing between a plain console format and single-line JSON records.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

PLAIN_FORMAT = "%(levelname)s  %(message)s"

_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
}


class StructuredJsonFormatter(logging.Formatter):
    """
    JSON formatter emitting one object per log record.

    Fields: timestamp (ISO 8601, UTC), level, logger, message, exception
    when present, plus any ``extra`` values passed to the log call.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                try:
                    json.dumps(value)
                    log_obj[key] = value
                except (TypeError, ValueError):
                    log_obj[key] = str(value)

        return json.dumps(log_obj, default=str)


def configure_logging(
    level: int = logging.WARNING,
    *,
    json_format: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Configure the ``claude_move`` logger hierarchy.

    Args:
        level: Logging level (default: WARNING, so only problems show up
            next to the operator-facing output)
        json_format: Emit StructuredJsonFormatter records instead of plain text
        stream: Target stream (default: stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("claude_move")

    # Repeated calls (tests, re-entry) must not stack handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(StructuredJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_move_logger(name: str) -> logging.Logger:
    """
    Get a logger for a claude-move component.

    Args:
        name: Component name (e.g., 'cli', 'migration')

    Returns:
        Logger instance with name 'claude_move.{name}'
    """
    return logging.getLogger(f"claude_move.{name}")


class SessionLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that attaches the session being migrated to every record.

    The context shows up as extra fields in JSON output.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs
