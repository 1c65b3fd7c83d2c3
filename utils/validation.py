"""
Validation utilities module.

This module provides the value checks used when building helper configuration.
"""

from typing import Any, Optional
from urllib.parse import urlparse

from utils.errors import ValidationError


def validate_url(url: str, allow_relative: bool = False) -> bool:
    """
    Validate a URL.

    Args:
        url: The URL to validate
        allow_relative: Whether to allow root-relative URLs

    Returns:
        True if valid, False otherwise
    """
    if not url:
        return False

    if allow_relative and url.startswith('/'):
        return True

    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except ValueError:
        return False


def validate_integer(
    value: Any,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None
) -> bool:
    """
    Validate an integer.

    Args:
        value: The value to validate
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        True if valid, False otherwise
    """
    try:
        # Convert to int if string
        if isinstance(value, str):
            value = int(value)
        elif not isinstance(value, int) or isinstance(value, bool):
            return False

        if min_value is not None and value < min_value:
            return False
        if max_value is not None and value > max_value:
            return False

        return True
    except (ValueError, TypeError):
        return False


def validate_string(
    value: Any,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None
) -> bool:
    """
    Validate a string.

    Args:
        value: The value to validate
        min_length: Minimum allowed length
        max_length: Maximum allowed length

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(value, str):
        return False

    if min_length is not None and len(value) < min_length:
        return False
    if max_length is not None and len(value) > max_length:
        return False

    return True


def require_url(url: Any, field: str) -> str:
    """
    Return ``url`` unchanged, raising if it is not an absolute http(s) URL.

    Raises:
        ValidationError: If the URL is missing or not absolute
    """
    if not isinstance(url, str) or not validate_url(url):
        raise ValidationError(f"{field} must be an absolute http(s) URL, got {url!r}", field=field)
    return url


def require_integer(value: Any, field: str, min_value: Optional[int] = None) -> int:
    """
    Return ``value`` as an int, raising if it is not a valid integer.

    Raises:
        ValidationError: If the value is not an integer or below ``min_value``
    """
    if not validate_integer(value, min_value=min_value):
        bound = f" >= {min_value}" if min_value is not None else ""
        raise ValidationError(f"{field} must be an integer{bound}, got {value!r}", field=field)
    return int(value)
