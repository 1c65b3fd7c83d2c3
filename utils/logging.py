"""
Logging utilities module.

This module provides logging configuration and utilities for the helpers.
"""

import logging
import os
import sys
import json
import time
from datetime import datetime
from typing import Dict, Any, Optional

# Default log format
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "INFO"


def _reset_root_logger(log_level: Optional[str]) -> logging.Logger:
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    level = getattr(logging, (log_level or DEFAULT_LOG_LEVEL).upper(), logging.INFO)
    root_logger.setLevel(level)
    return root_logger


def _add_handlers(
    root_logger: logging.Logger,
    formatter: logging.Formatter,
    log_file: Optional[str],
    enable_console: bool
) -> None:
    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def setup_logging(
    log_level: str = None,
    log_file: str = None,
    log_format: str = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        log_format: Log message format
        enable_console: Whether to log to console

    Returns:
        The root logger instance
    """
    root_logger = _reset_root_logger(log_level)
    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)
    _add_handlers(root_logger, formatter, log_file, enable_console)
    return root_logger


class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    """

    def __init__(self, include_extra_fields: bool = True):
        """
        Initialize the JSON formatter.

        Args:
            include_extra_fields: Whether to include extra fields from record
        """
        super().__init__()
        self.include_extra_fields = include_extra_fields

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "filename": record.filename,
            "lineno": record.lineno
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        if self.include_extra_fields and hasattr(record, "extra_fields"):
            extra = record.extra_fields
            if isinstance(extra, dict):
                for key, value in extra.items():
                    if key not in log_data:
                        log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_structured_logging(
    log_level: str = None,
    log_file: str = None,
    enable_console: bool = True,
    include_extra_fields: bool = True
) -> logging.Logger:
    """
    Configure structured JSON logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        enable_console: Whether to log to console
        include_extra_fields: Whether to include extra fields in JSON

    Returns:
        The root logger instance
    """
    root_logger = _reset_root_logger(log_level)
    formatter = JsonFormatter(include_extra_fields=include_extra_fields)
    _add_handlers(root_logger, formatter, log_file, enable_console)
    return root_logger


class LogContext:
    """
    Context manager for adding context to log records.
    """

    def __init__(self, **context):
        """
        Initialize the context manager.

        Args:
            **context: Context fields to add to log records
        """
        self.context = context
        self.old_factory = logging.getLogRecordFactory()

    def __enter__(self):
        old_factory = self.old_factory
        context = self.context

        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            if not hasattr(record, "extra_fields"):
                record.extra_fields = {}
            record.extra_fields.update(context)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.setLogRecordFactory(self.old_factory)


class PerformanceLogger:
    """
    Logger for timing wait operations.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize the performance logger.

        Args:
            logger: The logger to use
        """
        self.logger = logger
        self.timers: Dict[str, float] = {}

    def start_timer(self, operation: str) -> None:
        """
        Start a timer for an operation.

        Args:
            operation: Name of the operation to time
        """
        self.timers[operation] = time.monotonic()

    def end_timer(
        self,
        operation: str,
        log_level: str = "debug",
        context: Optional[Dict[str, Any]] = None
    ) -> float:
        """
        End a timer and log the elapsed time.

        Args:
            operation: Name of the operation to end
            log_level: Level to log at (debug, info, etc.)
            context: Additional fields for the log record

        Returns:
            Elapsed time in milliseconds

        Raises:
            ValueError: If timer was not started
        """
        if operation not in self.timers:
            raise ValueError(f"Timer for '{operation}' was not started")

        elapsed_ms = (time.monotonic() - self.timers.pop(operation)) * 1000

        log_data = {
            "event": "performance",
            "operation": operation,
            "elapsed_ms": elapsed_ms
        }
        if context:
            log_data.update(context)

        log_method = getattr(self.logger, log_level, self.logger.debug)
        log_method(f"Operation '{operation}' took {elapsed_ms:.2f}ms", extra={"extra_fields": log_data})

        return elapsed_ms
