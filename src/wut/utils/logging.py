"""Logging setup for wut.

Diagnostics go to stderr so they never mix with the report printed on
stdout. Records may carry the file being processed, its content type and
the external program involved, passed as ``extra``::

    logger.debug("classified", extra={"file": path, "content_type": "text/plain"})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger("wut")

# Attributes a record may carry through ``extra``, in display order.
CONTEXT_FIELDS = ("file", "content_type", "program")


def record_context(record: logging.LogRecord) -> dict[str, str]:
    """Context fields set on ``record``, stringified."""
    return {
        name: str(getattr(record, name))
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log files and log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """``LEVEL    logger: message [key=value ...]`` with optional ANSI colors."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        context = record_context(record)
        if context:
            pairs = " ".join(f"{name}={value}" for name, value in context.items())
            message = f"{message} [{pairs}]"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"
        return f"{level} {record.name}: {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool | None = None,
) -> logging.Logger:
    """Configure the ``wut`` logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Log level name; unknown names fall back to WARNING.
        log_file: Optional file that receives JSON lines.
        json_format: Write JSON lines to stderr too.
        use_color: Colorize stderr output. Defaults to whether stderr is a TTY.

    Returns:
        The configured ``wut`` logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    if use_color is None:
        use_color = sys.stderr.isatty()

    stderr_handler = logging.StreamHandler(sys.stderr)
    if json_format:
        stderr_handler.setFormatter(JSONFormatter())
    else:
        stderr_handler.setFormatter(ConsoleFormatter(use_color=use_color))
    logger.addHandler(stderr_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a module (e.g. ``wut.content.extract``)."""
    return logging.getLogger(name)
