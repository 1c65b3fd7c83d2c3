"""
Browser helpers module.

This module extends Playwright pages with waits for DOM conditions and basic
interaction helpers.
"""

from browser.conditions import Condition, poll, wait_for_condition, escape_pattern, compile_pattern
from browser.helpers import PageHelpers, extend_page
from browser.keys import Key
from browser.manager import BrowserManager

__all__ = [
    'BrowserManager',
    'Condition',
    'Key',
    'PageHelpers',
    'compile_pattern',
    'escape_pattern',
    'extend_page',
    'poll',
    'wait_for_condition'
]
