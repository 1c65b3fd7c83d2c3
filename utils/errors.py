"""
Error handling utilities module.

This module provides exception classes and error handling utilities for the helpers.
"""

import logging
import traceback
from typing import Dict, Any, Optional

# Set up logger
logger = logging.getLogger(__name__)


class HelperError(Exception):
    """Base exception class for the page helpers."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class BrowserError(HelperError):
    """Exception raised for browser-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Browser error: {message}", details)


class ElementNotFoundError(BrowserError):
    """Exception raised when an element is not on the page."""

    def __init__(self, selector: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            selector: The selector that matched nothing
            details: Additional error details
        """
        details = details or {}
        details["selector"] = selector
        super().__init__(f"Element not found: {selector}", details)


class TimeoutError(BrowserError):
    """
    Exception raised when a wait condition is not met in time.

    The operation is the condition's description, e.g.
    ``for element .spinner to not exist``.
    """

    def __init__(self, operation: str, timeout: float, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            operation: Description of the condition that was waited for
            timeout: The timeout value in milliseconds
            details: Additional error details
        """
        details = details or {}
        details["operation"] = operation
        details["timeout"] = timeout
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"Waiting {operation} timed out after {timeout}ms", details)


class ValidationError(HelperError):
    """Exception raised for validation errors."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        if field is not None:
            details["field"] = field
        super().__init__(f"Validation error: {message}", details)


class ConfigError(HelperError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Configuration error: {message}", details)


def format_exception(
    exc: Exception,
    include_traceback: bool = True
) -> Dict[str, Any]:
    """
    Format an exception into a standardized dictionary.

    Args:
        exc: The exception to format
        include_traceback: Whether to include the traceback

    Returns:
        Dictionary with formatted exception details
    """
    result = {
        "type": exc.__class__.__name__,
        "message": str(exc)
    }

    if isinstance(exc, HelperError) and exc.details:
        result["details"] = exc.details

    if include_traceback:
        result["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )

    return result


def error_to_user_message(error: Exception) -> str:
    """
    Convert an error to a short message for the command line.

    Args:
        error: The exception to convert

    Returns:
        User-friendly error message
    """
    if isinstance(error, ElementNotFoundError):
        selector = error.details.get("selector", "the element")
        return f"Nothing on the page matches {selector}."

    elif isinstance(error, TimeoutError):
        operation = error.details.get("operation", "the condition")
        timeout = error.details.get("timeout")
        return f"Gave up waiting {operation} after {timeout}ms."

    elif isinstance(error, ValidationError):
        field = error.details.get("field", "input")
        return f"There was a problem with the {field}. Please check it and try again."

    elif isinstance(error, ConfigError):
        return f"There's a configuration issue: {error.message}"

    return f"An error occurred: {str(error)}"


def log_exception(
    error: Exception,
    level: str = "error",
    include_traceback: bool = True
) -> None:
    """
    Log an exception with appropriate formatting.

    Args:
        error: The exception to log
        level: Logging level ('debug', 'info', 'warning', 'error', 'critical')
        include_traceback: Whether to include the traceback
    """
    logger_method = getattr(logger, level.lower(), logger.error)

    error_type = error.__class__.__name__
    error_message = str(error)

    if isinstance(error, HelperError) and error.details:
        details_str = ", ".join([f"{k}={v}" for k, v in error.details.items()])
        log_message = f"{error_type}: {error_message} - {details_str}"
    else:
        log_message = f"{error_type}: {error_message}"

    if include_traceback:
        logger_method(log_message, exc_info=error)
    else:
        logger_method(log_message)
