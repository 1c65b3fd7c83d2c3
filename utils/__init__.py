"""
Utilities package.

This package provides errors, logging and validation shared by the helpers.
"""

from utils.errors import (
    HelperError, BrowserError, ElementNotFoundError,
    TimeoutError, ValidationError, ConfigError, format_exception,
    error_to_user_message, log_exception
)

from utils.logging import (
    setup_logging, setup_structured_logging, JsonFormatter,
    LogContext, PerformanceLogger
)

from utils.validation import (
    validate_url, validate_integer, validate_string, require_url, require_integer
)

__all__ = [
    # Errors
    'HelperError', 'BrowserError', 'ElementNotFoundError',
    'TimeoutError', 'ValidationError', 'ConfigError', 'format_exception',
    'error_to_user_message', 'log_exception',

    # Logging
    'setup_logging', 'setup_structured_logging', 'JsonFormatter',
    'LogContext', 'PerformanceLogger',

    # Validation
    'validate_url', 'validate_integer', 'validate_string', 'require_url',
    'require_integer'
]
