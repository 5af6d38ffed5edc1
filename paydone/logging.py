"""Structured logging configuration for paydone."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from paydone.sinks.serialization import serialize_value


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for paydone.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("paydone").setLevel(log_level)

    # Faker logs every provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Debt context passed as ``extra={"extra": {...}}`` is rendered the same way
    the sinks render records: money as exact decimal strings, due dates as
    local ISO dates and enums by value.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = getattr(record, "extra", None)
        if isinstance(context, dict):
            for key, value in context.items():
                # Context never overrides the record's own fields
                log_data.setdefault(str(key), serialize_value(value))

        return json.dumps(log_data, default=str)
