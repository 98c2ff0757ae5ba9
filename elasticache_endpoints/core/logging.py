"""
Logging utilities for ElastiCache endpoint resolution.

This module provides structured logging with JSON formatting for Lambda environments
and human-readable formatting for development. Features include operation timing
and extra context fields (cluster ids, regions, error categories) on every record.
"""

import json
import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional, Tuple

ROOT_LOGGER_NAME = "elasticache_endpoints"


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs JSON for Lambda/CloudWatch or human-readable for development.
    """

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra
        self.is_lambda = bool(os.environ.get("AWS_LAMBDA_FUNCTION_NAME"))

    def format(self, record: logging.LogRecord) -> str:
        if self.is_lambda:
            return self._format_json(record)
        else:
            return self._format_human(record)

    def _format_json(self, record: logging.LogRecord) -> str:
        """Format log record as JSON for CloudWatch."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if self.include_extra and hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)

    def _format_human(self, record: logging.LogRecord) -> str:
        """Format log record for human readability in development."""
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        message = record.getMessage()

        if self.include_extra and hasattr(record, "extra_data"):
            extra_parts = [f"{k}={v}" for k, v in record.extra_data.items()]
            if extra_parts:
                message += f" [{', '.join(extra_parts)}]"

        formatted = f"{timestamp} - {record.levelname:8} - {record.name} - {message}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class EndpointLogger:
    """
    Logger wrapper that accepts keyword context and times operations.

    Child loggers (``elasticache_endpoints.resolver`` and friends) propagate to the
    package root logger, which owns the single stderr handler.
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME, level: Optional[str] = None):
        if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        self.logger = logging.getLogger(name)
        _setup_root_logger(level)

    @property
    def name(self) -> str:
        return self.logger.name

    def info(self, message: str, **extra):
        """Log info message with optional extra context."""
        self._log_with_extra(logging.INFO, message, extra)

    def debug(self, message: str, **extra):
        """Log debug message with optional extra context."""
        self._log_with_extra(logging.DEBUG, message, extra)

    def warning(self, message: str, **extra):
        """Log warning message with optional extra context."""
        self._log_with_extra(logging.WARNING, message, extra)

    def error(self, message: str, exc_info: bool = False, **extra):
        """Log error message with optional exception info and extra context."""
        self._log_with_extra(logging.ERROR, message, extra, exc_info=exc_info)

    def _log_with_extra(
        self, level: int, message: str, extra: Dict[str, Any], exc_info: bool = False
    ):
        if not self.logger.isEnabledFor(level):
            return
        if extra:
            exc_info_tuple = sys.exc_info() if exc_info else None
            record = self.logger.makeRecord(
                self.logger.name, level, "", 0, message, (), exc_info_tuple
            )
            record.extra_data = extra
            self.logger.handle(record)
        else:
            self.logger.log(level, message, exc_info=exc_info)

    @contextmanager
    def timer(self, operation: str, expected: Tuple[type, ...] = (), **extra):
        """Context manager for timing operations.

        Exceptions that are instances of ``expected`` are logged at warning
        level; anything else is logged as an error. Both are re-raised.
        """
        start_time = time.time()
        self.debug(f"Starting {operation}", **extra)

        try:
            yield
            duration = time.time() - start_time
            self.debug(
                f"Completed {operation}", duration_seconds=f"{duration:.2f}", **extra
            )
        except expected as e:
            duration = time.time() - start_time
            self.warning(
                f"Failed {operation}",
                duration_seconds=f"{duration:.2f}",
                error=str(e),
                **extra,
            )
            raise
        except Exception as e:
            duration = time.time() - start_time
            self.error(
                f"Failed {operation}",
                duration_seconds=f"{duration:.2f}",
                error=str(e),
                **extra,
            )
            raise


def _setup_root_logger(level: Optional[str] = None):
    """Attach the structured handler to the package root logger once."""
    root = logging.getLogger(ROOT_LOGGER_NAME)

    if level:
        root.setLevel(getattr(logging, level.upper()))

    if root.handlers:
        return  # Already configured

    if not level:
        root.setLevel(logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)

    # Prevent duplicate logs in Lambda
    root.propagate = False


def setup_logging(level: str = "INFO") -> EndpointLogger:
    """
    Set up logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured root EndpointLogger
    """
    return EndpointLogger(level=level)


def get_logger(name: str = ROOT_LOGGER_NAME) -> EndpointLogger:
    """
    Get a logger instance.

    Args:
        name: Logger name, relative to the package root logger

    Returns:
        EndpointLogger instance
    """
    return EndpointLogger(name)
