"""
Tests for the browser manager.

Playwright is replaced with mocks, so no browser is launched.
"""

import unittest
from unittest.mock import patch

from tests.test_framework import MockPlaywright, MockPlaywrightStarter, MockPage, async_test, TEST_ORIGIN
from browser.helpers import PageHelpers
from browser.manager import BrowserManager
from config.settings import Settings


class TestBrowserManager(unittest.TestCase):
    """Test case for browser lifecycle management."""

    def setUp(self):
        self.mock_playwright = MockPlaywright()
        self.playwright_patch = patch(
            "browser.manager.async_playwright",
            return_value=MockPlaywrightStarter(self.mock_playwright)
        )
        self.playwright_patch.start()
        self.settings = Settings(
            origin=TEST_ORIGIN,
            browser_type="firefox",
            loader_selector=".spinner",
            navigation_timeout=15000,
            action_timeout=5000
        )

    def tearDown(self):
        self.playwright_patch.stop()

    @async_test
    async def test_initialize_launches_configured_browser(self):
        manager = BrowserManager(self.settings)

        await manager.initialize()
        await manager.initialize()

        self.assertTrue(manager.initialized)
        self.assertEqual(len(self.mock_playwright.firefox.launched), 1)
        self.assertEqual(self.mock_playwright.chromium.launched, [])
        self.assertTrue(manager.browser.launch_options["headless"])

    @async_test
    async def test_new_helpers(self):
        async with BrowserManager(self.settings) as manager:
            helpers = await manager.new_helpers()

            self.assertIsInstance(helpers, PageHelpers)
            self.assertIsInstance(helpers.page, MockPage)
            self.assertEqual(helpers.options.origin, TEST_ORIGIN)
            self.assertEqual(helpers.options.loader_selector, ".spinner")

            context = manager.contexts[0]
            self.assertEqual(context.navigation_timeout, 15000)
            self.assertEqual(context.default_timeout, 5000)
            self.assertEqual(context.options["viewport"], {"width": 1280, "height": 720})

            await helpers.load("/widgets")
            self.assertEqual(helpers.page.url, "http://localhost:9000/widgets")

    @async_test
    async def test_new_page_initializes_lazily(self):
        manager = BrowserManager(self.settings)

        await manager.new_page()

        self.assertTrue(manager.initialized)
        await manager.cleanup()

    @async_test
    async def test_cleanup(self):
        manager = BrowserManager(self.settings)
        await manager.new_page()
        browser = manager.browser
        context = manager.contexts[0]

        await manager.cleanup()

        self.assertTrue(context.is_closed)
        self.assertTrue(browser.is_closed)
        self.assertTrue(self.mock_playwright.stopped)
        self.assertFalse(manager.initialized)
        self.assertIsNone(manager.browser)
        self.assertEqual(manager.contexts, [])


if __name__ == '__main__':
    unittest.main()
