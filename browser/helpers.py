"""
Page helpers module.

``extend_page`` wraps a Playwright page with wait and interaction helpers:

    from playwright.async_api import async_playwright
    from browser.helpers import extend_page

    async with async_playwright() as p:
        browser = await p.chromium.launch()
        page = extend_page(await browser.new_page(), origin="http://localhost:8080")

        await page.load("/widgets")
        button = await page.wait_for_element_to_be_visible("[data-test=save]")
        await page.hover_over(button)

Every "wait for" helper first lets blocking loaders (``loader_selector``)
leave the page. The loader wait and the main wait each get the full timeout.
"""

import asyncio
import dataclasses
import logging
from typing import Any, Mapping, Optional, Union

from playwright.async_api import Page, ElementHandle, Response

from browser import conditions
from browser.conditions import Condition, PatternLike, wait_for_condition
from browser.keys import Key
from config.settings import HelperOptions
from utils.errors import ConfigError, ElementNotFoundError

# Set up logger
logger = logging.getLogger(__name__)

_OPTION_NAMES = frozenset(f.name for f in dataclasses.fields(HelperOptions))


class PageHelpers:
    """
    A Playwright page extended with wait and interaction helpers.

    Attributes not defined here are looked up on the wrapped page, so
    ``helpers.title()`` or ``helpers.keyboard`` work as on the page itself.
    """

    Key = Key
    until = conditions

    def __init__(self, page: Page, options: HelperOptions):
        """
        Initialize the helpers.

        Args:
            page: The page to extend
            options: Origin, loader selector and wait timing
        """
        self.page = page
        self.options = options

    def __getattr__(self, name: str) -> Any:
        if name == "page":
            raise AttributeError(name)
        return getattr(self.page, name)

    def __repr__(self) -> str:
        return f"PageHelpers(origin={self.options.origin!r}, url={self.page.url!r})"

    def _timeout(self, timeout: Optional[int]) -> int:
        return timeout or self.options.default_timeout

    async def wait(self, condition: Condition, timeout: Optional[int] = None) -> Any:
        """
        Wait for any condition on the page.

        Args:
            condition: A condition, e.g. one built with ``helpers.until``
            timeout: Milliseconds to wait, defaulting to ``default_timeout``

        Returns:
            The value that satisfied the condition

        Raises:
            TimeoutError: If the condition is not met in time
        """
        return await wait_for_condition(
            self.page,
            condition,
            timeout=self._timeout(timeout),
            poll_interval=self.options.poll_interval
        )

    async def pause(self, timeout: int) -> None:
        """
        Pause execution for a specified period.

        Args:
            timeout: Milliseconds to pause
        """
        logger.debug(f"Pausing for {timeout}ms")
        await asyncio.sleep(timeout / 1000)

    async def load(self, path: str) -> Optional[Response]:
        """
        Load a root-relative path. This is an actual page load, not a dynamic routing.

        Args:
            path: Must be root-relative, e.g. ``/widgets``

        Returns:
            The main resource response, if any
        """
        url = f"{self.options.origin}{path}"
        logger.info(f"Loading {url}")

        response = await self.page.goto(url)

        if response is not None and not response.ok:
            logger.warning(f"Page load received non-OK status code: {response.status}")

        return response

    async def select_element(self, selector: str) -> ElementHandle:
        """
        Select an element that should be on the page at this moment.

        Raises:
            ElementNotFoundError: If nothing matches ``selector``
        """
        element = await self.page.query_selector(selector)
        if element is None:
            raise ElementNotFoundError(selector)
        return element

    async def wait_for_element_absence(self, selector: str, timeout: Optional[int] = None) -> None:
        """
        Wait for an element's absence from the page.

        This is not about the element's visibility, but about its existence in the HTML.

        Args:
            selector: CSS selector
            timeout: Milliseconds to wait
        """
        await self.wait(conditions.element_absent(selector), timeout)

    async def wait_for_loaders(self, timeout: Optional[int] = None) -> None:
        """
        Wait for any blocking loaders to leave the page.

        Args:
            timeout: Milliseconds to wait
        """
        await self.wait_for_element_absence(self.options.loader_selector, timeout)

    async def wait_for_element(self, selector: str, timeout: Optional[int] = None) -> ElementHandle:
        """
        Wait for an element's presence on the page.

        This is not about the element's visibility, but about its existence in the HTML.

        Args:
            selector: CSS selector
            timeout: Milliseconds for each of the loader wait and the element wait

        Returns:
            The first matching element
        """
        timeout = self._timeout(timeout)
        await self.wait_for_loaders(timeout)
        return await self.wait(conditions.element_located(selector), timeout)

    async def wait_for_element_to_be_visible(self, selector: str, timeout: Optional[int] = None) -> ElementHandle:
        """
        Wait for an element to be visible (and, of course, present in the actual HTML).

        Args:
            selector: CSS selector
            timeout: Milliseconds for each stage of the wait

        Returns:
            The visible element
        """
        timeout = self._timeout(timeout)
        await self.wait_for_element(selector, timeout)
        return await self.wait(conditions.element_visible(selector), timeout)

    async def wait_for_element_not_to_be_visible(self, selector: str, timeout: Optional[int] = None) -> ElementHandle:
        """
        Wait for an element to be invisible (though still present in the actual HTML).

        Args:
            selector: CSS selector
            timeout: Milliseconds for each stage of the wait

        Returns:
            The hidden element
        """
        timeout = self._timeout(timeout)
        await self.wait_for_element(selector, timeout)
        return await self.wait(conditions.element_not_visible(selector), timeout)

    async def wait_for_url(self, pattern: PatternLike, timeout: Optional[int] = None) -> str:
        """
        Wait for the browser to arrive at a certain URL.

        Args:
            pattern: A compiled regex, or a string matched literally anywhere in the URL
            timeout: Milliseconds for each of the loader wait and the URL wait

        Returns:
            The matching URL
        """
        condition = conditions.url_matches(pattern)
        timeout = self._timeout(timeout)
        await self.wait_for_loaders(timeout)
        return await self.wait(condition, timeout)

    async def hover_over(self, element: ElementHandle) -> None:
        """
        Move the mouse over an element.

        Args:
            element: The element to hover
        """
        await element.hover()

    async def wait_for_element_to_have_class(
        self,
        selector: str,
        class_name: PatternLike,
        timeout: Optional[int] = None
    ) -> ElementHandle:
        """
        Wait for the first element identified by the selector to have the specified class.

        Args:
            selector: CSS selector
            class_name: Exact class name, or a compiled regex tested against each class
            timeout: Milliseconds for each of the loader wait and the class wait

        Returns:
            The element
        """
        return await self._wait_after_loaders(conditions.element_has_class(selector, class_name), timeout)

    async def wait_for_element_not_to_have_class(
        self,
        selector: str,
        class_name: PatternLike,
        timeout: Optional[int] = None
    ) -> ElementHandle:
        """
        Wait for the first element identified by the selector to not have the specified class.

        The element must still be on the page.
        """
        return await self._wait_after_loaders(conditions.element_lacks_class(selector, class_name), timeout)

    async def wait_for_element_to_have_text(
        self,
        selector: str,
        text: PatternLike,
        timeout: Optional[int] = None
    ) -> ElementHandle:
        """
        Wait for the first element identified by the selector to contain the specified text.

        Args:
            selector: CSS selector
            text: A string found anywhere in the element's text, or a compiled regex
            timeout: Milliseconds for each of the loader wait and the text wait

        Returns:
            The element
        """
        return await self._wait_after_loaders(conditions.element_has_text(selector, text), timeout)

    async def wait_for_element_not_to_have_text(
        self,
        selector: str,
        text: PatternLike,
        timeout: Optional[int] = None
    ) -> ElementHandle:
        """
        Wait for the first element identified by the selector to not contain the specified text.

        The element must still be on the page.
        """
        return await self._wait_after_loaders(conditions.element_lacks_text(selector, text), timeout)

    async def _wait_after_loaders(self, condition: Condition, timeout: Optional[int]) -> Any:
        timeout = self._timeout(timeout)
        await self.wait_for_loaders(timeout)
        return await self.wait(condition, timeout)


def extend_page(
    page: Page,
    options: Union[HelperOptions, Mapping[str, Any], None] = None,
    **overrides
) -> PageHelpers:
    """
    Extend a Playwright page with helpers.

    Args:
        page: The page to extend
        options: Helper options, or a mapping of their fields
        **overrides: Option fields that take precedence over ``options``

    Returns:
        The page wrapped in ``PageHelpers``

    Raises:
        ConfigError: If ``origin`` is missing or an option is invalid
    """
    unknown = set(overrides) - _OPTION_NAMES
    if not isinstance(options, HelperOptions):
        unknown |= set(options or {}) - _OPTION_NAMES
    if unknown:
        raise ConfigError(f"Unknown helper options: {', '.join(sorted(unknown))}")

    if isinstance(options, HelperOptions):
        if overrides:
            options = dataclasses.replace(options, **overrides)
    else:
        fields = dict(options or {})
        fields.update(overrides)
        if "origin" not in fields:
            raise ConfigError("origin is required, e.g. origin='http://localhost:8080'")
        options = HelperOptions(**fields)

    logger.debug(f"Extending page with helpers for origin {options.origin}")
    return PageHelpers(page, options)
