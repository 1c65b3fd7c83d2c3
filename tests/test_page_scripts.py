"""
Tests for the in-page checks against a real browser.

These run the JavaScript that the class, text and visibility conditions send
to the page. They are skipped when Chromium cannot be launched.
"""

import re
import unittest
from contextlib import asynccontextmanager

from playwright.async_api import async_playwright

from tests.test_framework import async_test, skip_if_no_browser, TEST_ORIGIN
from browser.helpers import extend_page
from utils.errors import TimeoutError

STATUS_PAGE = """
<div id="status" class="badge">Saved 1.5 items</div>
<div id="ghost" style="visibility: hidden">boo</div>
<div id="collapsed" style="display: none">gone</div>
"""


@asynccontextmanager
async def helpers_for(html):
    """Yield helpers around a real page showing ``html``."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            page = await browser.new_page()
            await page.set_content(html)
            yield extend_page(page, origin=TEST_ORIGIN, poll_interval=20)
        finally:
            await browser.close()


class TestClassScript(unittest.TestCase):
    """Test case for the class check running in the page."""

    @skip_if_no_browser
    @async_test
    async def test_class_present(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            element = await helpers.wait_for_element_to_have_class("#status", "badge", 1000)

            self.assertEqual(await element.get_attribute("id"), "status")

    @skip_if_no_browser
    @async_test
    async def test_class_added_later(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            await helpers.page.evaluate(
                "setTimeout(() => document.querySelector('#status').classList.add('active'), 100)"
            )

            element = await helpers.wait_for_element_to_have_class("#status", "active", 2000)

            self.assertIn("active", await element.get_attribute("class"))

    @skip_if_no_browser
    @async_test
    async def test_class_removed_later(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            await helpers.page.evaluate(
                "setTimeout(() => document.querySelector('#status').classList.remove('badge'), 100)"
            )

            element = await helpers.wait_for_element_not_to_have_class("#status", "badge", 2000)

            self.assertEqual(await element.get_attribute("class"), "")

    @skip_if_no_browser
    @async_test
    async def test_class_name_is_not_a_pattern(self):
        async with helpers_for('<div id="x" class="axb"></div>') as helpers:
            with self.assertRaises(TimeoutError):
                await helpers.wait_for_element_to_have_class("#x", "a.b", 200)

            self.assertIsNotNone(await helpers.wait_for_element_not_to_have_class("#x", "a.b", 200))

    @skip_if_no_browser
    @async_test
    async def test_regex_class_with_flags(self):
        async with helpers_for('<div id="x" class="Is-Selected"></div>') as helpers:
            with self.assertRaises(TimeoutError):
                await helpers.wait_for_element_to_have_class("#x", re.compile("^is-"), 200)

            self.assertIsNotNone(
                await helpers.wait_for_element_to_have_class("#x", re.compile("^is-", re.IGNORECASE), 1000)
            )


class TestTextScript(unittest.TestCase):
    """Test case for the text check running in the page."""

    @skip_if_no_browser
    @async_test
    async def test_literal_text(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            element = await helpers.wait_for_element_to_have_text("#status", "1.5 items", 1000)

            self.assertEqual(await element.text_content(), "Saved 1.5 items")

            with self.assertRaises(TimeoutError):
                await helpers.wait_for_element_to_have_text("#status", "1x5", 200)

    @skip_if_no_browser
    @async_test
    async def test_dot_does_not_match_any_character(self):
        async with helpers_for('<p id="label">axb</p>') as helpers:
            with self.assertRaises(TimeoutError):
                await helpers.wait_for_element_to_have_text("#label", "a.b", 200)

            self.assertIsNotNone(await helpers.wait_for_element_not_to_have_text("#label", "a.b", 200))
            self.assertIsNotNone(await helpers.wait_for_element_to_have_text("#label", re.compile("a.b"), 200))

    @skip_if_no_browser
    @async_test
    async def test_text_changes_later(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            await helpers.page.evaluate(
                "setTimeout(() => { document.querySelector('#status').textContent = 'Failed'; }, 100)"
            )

            element = await helpers.wait_for_element_not_to_have_text("#status", "Saved", 2000)

            self.assertEqual(await element.text_content(), "Failed")

    @skip_if_no_browser
    @async_test
    async def test_regex_text_with_flags(self):
        async with helpers_for('<p id="log">first line\nSAVED</p>') as helpers:
            with self.assertRaises(TimeoutError):
                await helpers.wait_for_element_to_have_text("#log", re.compile("^saved"), 200)

            self.assertIsNotNone(
                await helpers.wait_for_element_to_have_text("#log", re.compile("^saved", re.I | re.M), 1000)
            )
            self.assertIsNotNone(
                await helpers.wait_for_element_to_have_text("#log", re.compile("line.SAVED", re.S), 1000)
            )


class TestVisibilityScript(unittest.TestCase):
    """Test case for the not-visible check running in the page."""

    @skip_if_no_browser
    @async_test
    async def test_hidden_elements(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            self.assertIsNotNone(await helpers.wait_for_element_not_to_be_visible("#ghost", 1000))
            self.assertIsNotNone(await helpers.wait_for_element_not_to_be_visible("#collapsed", 1000))

    @skip_if_no_browser
    @async_test
    async def test_visible_element(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            with self.assertRaises(TimeoutError):
                await helpers.wait_for_element_not_to_be_visible("#status", 200)

            self.assertIsNotNone(await helpers.wait_for_element_to_be_visible("#status", 1000))

    @skip_if_no_browser
    @async_test
    async def test_missing_element_is_not_hidden(self):
        async with helpers_for(STATUS_PAGE) as helpers:
            with self.assertRaises(TimeoutError):
                await helpers.wait(helpers.until.element_not_visible("#missing"), 200)


if __name__ == '__main__':
    unittest.main()
