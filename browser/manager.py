"""
Browser lifecycle management module.

This module launches a Playwright browser from ``Settings`` and hands out
pages extended with helpers.
"""

import logging
from typing import List, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from browser.helpers import PageHelpers, extend_page
from config.settings import Settings

# Set up logger
logger = logging.getLogger(__name__)


class BrowserManager:
    """
    Browser manager for helper-driven test runs.

    Usable as an async context manager:

        async with BrowserManager(settings) as manager:
            page = await manager.new_helpers()
    """

    def __init__(self, settings: Settings):
        """
        Initialize the browser manager.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.contexts: List[BrowserContext] = []
        self.initialized = False

    async def __aenter__(self) -> "BrowserManager":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.cleanup()

    async def initialize(self) -> None:
        """Launch Playwright and the configured browser."""
        if self.initialized:
            logger.debug("Browser manager already initialized")
            return

        logger.info("Initializing browser manager")

        try:
            self.playwright = await async_playwright().start()

            browser_type = self.settings.browser_type.lower()
            browser_launcher = getattr(self.playwright, browser_type)

            self.browser = await browser_launcher.launch(
                headless=self.settings.headless,
                args=self.settings.browser_args,
                slow_mo=self.settings.slow_mo
            )

            self.initialized = True
            logger.info(f"Browser manager initialized with {browser_type} browser")

        except Exception as e:
            logger.error(f"Error initializing browser manager: {str(e)}")
            await self.cleanup()
            raise

    async def cleanup(self) -> None:
        """Clean up resources used by the browser manager."""
        logger.info("Cleaning up browser manager resources")

        for context in self.contexts:
            try:
                await context.close()
            except Exception as e:
                logger.warning(f"Error closing browser context: {str(e)}")

        self.contexts = []

        if self.browser:
            try:
                await self.browser.close()
                logger.debug("Closed browser")
            except Exception as e:
                logger.warning(f"Error closing browser: {str(e)}")

            self.browser = None

        if self.playwright:
            try:
                await self.playwright.stop()
                logger.debug("Stopped playwright")
            except Exception as e:
                logger.warning(f"Error stopping playwright: {str(e)}")

            self.playwright = None

        self.initialized = False
        logger.info("Browser manager cleanup complete")

    async def new_page(self) -> Page:
        """
        Create a page in a fresh browser context.

        Returns:
            The new page
        """
        if not self.initialized:
            await self.initialize()

        context_options = {
            "viewport": {
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height
            }
        }
        if self.settings.user_agent:
            context_options["user_agent"] = self.settings.user_agent

        context = await self.browser.new_context(**context_options)
        context.set_default_navigation_timeout(self.settings.navigation_timeout)
        context.set_default_timeout(self.settings.action_timeout)
        self.contexts.append(context)

        page = await context.new_page()
        logger.debug(f"Created new page in context {len(self.contexts)}")
        return page

    async def new_helpers(self) -> PageHelpers:
        """
        Create a page and extend it with helpers using the settings' options.

        Returns:
            The extended page
        """
        page = await self.new_page()
        return extend_page(page, self.settings.helper_options())
