"""
Logging configuration for the audit CLI.

Logs always go to stderr so that stdout carries nothing but the rendered
report, which keeps `--output csv > status.csv` clean.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# LogRecord attributes copied into structured output when present
CONTEXT_FIELDS = ("namespace", "attempt", "cluster_id")


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter, one object per line.

    Suitable for log aggregation when the audit runs from automation.
    """

    def __init__(self, extra_fields: dict[str, Any] | None = None):
        super().__init__()
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(self.extra_fields)

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, ensure_ascii=False)


class HumanReadableFormatter(logging.Formatter):
    """Console formatter with colored level names when stderr is a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        levelname = f"{record.levelname:8}"
        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            levelname = f"{color}{levelname}{self.COLORS['RESET']}"

        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%H:%M:%S")
        message = record.getMessage()

        exc_text = ""
        if record.exc_info:
            exc_text = "\n" + "".join(traceback.format_exception(*record.exc_info))

        return f"{timestamp} {levelname} {record.name}: {message}{exc_text}"


def setup_logging(level: int = logging.INFO, json_format: bool = False) -> logging.Logger:
    """
    Configure the root logger with a single stderr handler.

    Args:
        level: Logging level
        json_format: Use StructuredFormatter instead of HumanReadableFormatter

    Returns:
        Logger for the hcp_autoscaling_audit package
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter: logging.Formatter = StructuredFormatter(
            extra_fields={"service": "hcp-autoscaling-audit"}
        )
    else:
        formatter = HumanReadableFormatter()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(level)

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # The Kubernetes client logs every request at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))

    logger = logging.getLogger("hcp_autoscaling_audit")
    logger.setLevel(level)
    return logger
