"""
Configuration module for the page helpers.

This module provides the helper options and launch settings.
"""

from config.settings import (
    Settings, HelperOptions, DEFAULT_LOADER_SELECTOR, DEFAULT_TIMEOUT, DEFAULT_POLL_INTERVAL
)

__all__ = [
    'Settings',
    'HelperOptions',
    'DEFAULT_LOADER_SELECTOR',
    'DEFAULT_TIMEOUT',
    'DEFAULT_POLL_INTERVAL'
]
