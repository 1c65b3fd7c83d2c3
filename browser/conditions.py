"""
Wait conditions module.

A condition pairs a description with a way of waiting for it on a page.
Element conditions hand the wait to Playwright (``wait_for_selector`` for
presence and visibility, ``wait_for_function`` for in-page checks); the URL
condition polls from Python. ``wait_for_condition`` runs a condition and turns
Playwright's timeout into a ``TimeoutError`` carrying the description.

The builder functions below play the part of Selenium's ``until`` module and
are exposed on extended pages as ``helpers.until``.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from playwright.async_api import Page, ElementHandle
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from config.settings import DEFAULT_TIMEOUT, DEFAULT_POLL_INTERVAL
from utils.errors import TimeoutError, ValidationError
from utils.logging import PerformanceLogger

# Set up logger
logger = logging.getLogger(__name__)

PatternLike = Union[str, re.Pattern]
Predicate = Callable[[Page], Awaitable[Any]]
Waiter = Callable[[Page, int, int], Awaitable[Any]]

# Same set as lodash's escapeRegExp, valid in both Python and JavaScript regexes
_REGEX_SPECIAL_CHARS = re.compile(r"[\\^$.*+?()[\]{}|]")

_JS_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
)

# str patterns always carry re.UNICODE, which is also how JavaScript reads them
_PORTABLE_FLAGS = re.IGNORECASE | re.MULTILINE | re.DOTALL | re.UNICODE


@dataclass(frozen=True)
class Condition:
    """
    A described wait on the page.

    Attributes:
        description: Human-readable text used in timeout errors, e.g.
            ``for element .modal to be visible``
        waiter: Coroutine function taking the page, a timeout and a polling
            interval (both in milliseconds). It returns the value that met
            the condition, or raises Playwright's ``TimeoutError``.
    """
    description: str
    waiter: Waiter

    async def wait(self, page: Page, timeout: int, poll_interval: int) -> Any:
        """Wait once for the condition."""
        return await self.waiter(page, timeout, poll_interval)


def escape_pattern(text: str) -> str:
    """
    Escape regex metacharacters so ``text`` matches literally.

    Args:
        text: Literal text

    Returns:
        Regex source matching ``text``
    """
    return _REGEX_SPECIAL_CHARS.sub(r"\\\g<0>", text)


def compile_pattern(pattern: PatternLike) -> re.Pattern:
    """
    Turn a string or compiled regex into a compiled regex.

    Strings are escaped first, so ``"a.b"`` matches ``"a.b"`` but not ``"axb"``.

    Raises:
        ValidationError: If ``pattern`` is neither a string nor a regex
    """
    if isinstance(pattern, str):
        return re.compile(escape_pattern(pattern))
    if isinstance(pattern, re.Pattern):
        return pattern
    raise ValidationError(
        f"Pattern must be a string or compiled regex, got {type(pattern).__name__}",
        field="pattern"
    )


def pattern_to_js(pattern: PatternLike) -> Dict[str, str]:
    """
    Describe a pattern as the ``source``/``flags`` pair of a JavaScript RegExp.

    The source is passed as is, so Python-only syntax such as ``(?P<name>...)``
    will not compile in the page.

    Raises:
        ValidationError: If the pattern uses flags other than ``re.I``,
            ``re.M`` and ``re.S``
    """
    compiled = compile_pattern(pattern)
    if compiled.flags & ~_PORTABLE_FLAGS:
        raise ValidationError(
            f"Pattern {compiled.pattern!r} uses flags that cannot be used in the page; "
            f"only re.IGNORECASE, re.MULTILINE and re.DOTALL are supported",
            field="pattern"
        )
    flags = "".join(js_flag for flag, js_flag in _JS_FLAGS if compiled.flags & flag)
    return {"source": compiled.pattern, "flags": flags}


# In-page predicates for page.wait_for_function. Each one selects a single
# element and returns it when the check holds, otherwise null, so a missing
# element looks like an unmet check.
NOT_VISIBLE_SCRIPT = """
(selector) => {
    const element = document.querySelector(selector);
    if (!element) {
        return null;
    }
    const style = window.getComputedStyle(element);
    const rect = element.getBoundingClientRect();
    const visible = style.visibility !== "hidden" && rect.width > 0 && rect.height > 0;
    return visible ? null : element;
}
"""

CLASS_CHECK_SCRIPT = """
({ selector, className, pattern, expected }) => {
    const element = document.querySelector(selector);
    if (!element) {
        return null;
    }
    const hasClass = pattern
        ? Array.from(element.classList).some((name) => new RegExp(pattern.source, pattern.flags).test(name))
        : element.classList.contains(className);
    return hasClass === expected ? element : null;
}
"""

TEXT_CHECK_SCRIPT = """
({ selector, pattern, expected }) => {
    const element = document.querySelector(selector);
    if (!element) {
        return null;
    }
    const hasText = new RegExp(pattern.source, pattern.flags).test(element.textContent || "");
    return hasText === expected ? element : null;
}
"""


def _in_page(script: str, arg: Any) -> Waiter:
    async def waiter(page: Page, timeout: int, poll_interval: int) -> Optional[ElementHandle]:
        handle = await page.wait_for_function(script, arg=arg, polling=poll_interval, timeout=timeout)
        return handle.as_element()
    return waiter


def _selector_state(selector: str, state: str) -> Waiter:
    async def waiter(page: Page, timeout: int, poll_interval: int) -> Optional[ElementHandle]:
        return await page.wait_for_selector(selector, state=state, timeout=timeout)
    return waiter


def poll(description: str, predicate: Predicate) -> Condition:
    """
    Build a condition from a Python predicate over the page.

    The predicate runs at least once and then once per polling interval until
    it returns a truthy value, which becomes the result of the wait. An
    evaluation still running at the deadline counts as unmet. Errors raised by
    the predicate end the wait.

    Args:
        description: Text used in the timeout error
        predicate: Coroutine function taking the page

    Returns:
        The condition
    """
    async def waiter(page: Page, timeout: int, poll_interval: int) -> Any:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout / 1000
        interval = poll_interval / 1000

        while True:
            budget = max(deadline - loop.time(), interval)
            try:
                value = await asyncio.wait_for(predicate(page), timeout=budget)
            except asyncio.TimeoutError:
                value = None

            if value:
                return value

            remaining = deadline - loop.time()
            if remaining <= 0:
                raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

            # Wait a bit before checking again
            await page.wait_for_timeout(min(interval, remaining) * 1000)

    return Condition(description, waiter)


def element_absent(selector: str) -> Condition:
    """Condition met when no element matches ``selector``."""
    return Condition(f"for element {selector} to not exist", _selector_state(selector, "detached"))


def element_located(selector: str) -> Condition:
    """Condition met, with the element, once ``selector`` matches something."""
    return Condition(f"for element to be located {selector}", _selector_state(selector, "attached"))


def element_visible(selector: str) -> Condition:
    """Condition met, with the element, once the first match is visible."""
    return Condition(f"for element {selector} to be visible", _selector_state(selector, "visible"))


def element_not_visible(selector: str) -> Condition:
    """
    Condition met, with the element, once the first match is on the page but hidden.

    Playwright's ``hidden`` state also accepts a missing element, so this one
    is checked in the page.
    """
    return Condition(f"for element {selector} not to be visible", _in_page(NOT_VISIBLE_SCRIPT, selector))


def url_matches(pattern: PatternLike) -> Condition:
    """
    Condition met, with the URL, once the page URL matches ``pattern``.

    String patterns match as literal substrings.
    """
    compiled = compile_pattern(pattern)

    async def predicate(page: Page) -> Optional[str]:
        url = page.url
        return url if compiled.search(url) else None

    return poll(f"for URL to match {compiled.pattern}", predicate)


def _class_check(selector: str, class_name: PatternLike, expected: bool) -> Condition:
    if isinstance(class_name, str):
        arg = {"selector": selector, "className": class_name, "pattern": None, "expected": expected}
        label = class_name
    else:
        arg = {"selector": selector, "className": None, "pattern": pattern_to_js(class_name), "expected": expected}
        label = class_name.pattern
    verb = "to have" if expected else "not to have"
    return Condition(f"for element {selector} {verb} class {label}", _in_page(CLASS_CHECK_SCRIPT, arg))


def element_has_class(selector: str, class_name: PatternLike) -> Condition:
    """Condition met, with the element, once the first match has ``class_name``."""
    return _class_check(selector, class_name, True)


def element_lacks_class(selector: str, class_name: PatternLike) -> Condition:
    """Condition met, with the element, once the first match lacks ``class_name``."""
    return _class_check(selector, class_name, False)


def _text_check(selector: str, text: PatternLike, expected: bool) -> Condition:
    js_pattern = pattern_to_js(text)
    arg = {"selector": selector, "pattern": js_pattern, "expected": expected}
    verb = "to have" if expected else "not to have"
    return Condition(f"for element {selector} {verb} text {js_pattern['source']}", _in_page(TEXT_CHECK_SCRIPT, arg))


def element_has_text(selector: str, text: PatternLike) -> Condition:
    """Condition met, with the element, once the first match's text contains ``text``."""
    return _text_check(selector, text, True)


def element_lacks_text(selector: str, text: PatternLike) -> Condition:
    """Condition met, with the element, once the first match's text no longer contains ``text``."""
    return _text_check(selector, text, False)


async def wait_for_condition(
    page: Page,
    condition: Condition,
    timeout: int = DEFAULT_TIMEOUT,
    poll_interval: int = DEFAULT_POLL_INTERVAL
) -> Any:
    """
    Wait for a condition to be met.

    Errors other than Playwright's timeout are not caught and end the wait.

    Args:
        page: The page to wait on
        condition: The condition to wait for
        timeout: How long to wait, in milliseconds
        poll_interval: Pause between checks, in milliseconds

    Returns:
        The value that met the condition

    Raises:
        TimeoutError: If the condition is not met within ``timeout``
    """
    logger.debug(f"Waiting {condition.description} (timeout {timeout}ms)")

    # One timer per wait, so waits with the same description can overlap
    performance = PerformanceLogger(logger)
    performance.start_timer(condition.description)
    outcome = "error"

    try:
        value = await condition.wait(page, timeout, poll_interval)
        outcome = "met"
        return value
    except PlaywrightTimeoutError:
        outcome = "timeout"
        logger.warning(f"Gave up waiting {condition.description} after {timeout}ms")
        raise TimeoutError(condition.description, timeout)
    finally:
        performance.end_timer(condition.description, context={"outcome": outcome, "timeout": timeout})
