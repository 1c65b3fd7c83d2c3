"""
Tests for helper options and application settings.
"""

import os
import dataclasses
import unittest
from unittest.mock import patch

from tests.test_framework import TEST_ORIGIN
from config.settings import (
    Settings, HelperOptions, DEFAULT_LOADER_SELECTOR, DEFAULT_TIMEOUT, DEFAULT_POLL_INTERVAL
)
from utils.errors import ConfigError


class TestHelperOptions(unittest.TestCase):
    """Test case for helper options."""

    def test_defaults(self):
        options = HelperOptions(origin=TEST_ORIGIN)

        self.assertEqual(options.loader_selector, '[data-test="loader"]:not(.hidden)')
        self.assertEqual(options.default_timeout, 10000)
        self.assertEqual(options.poll_interval, DEFAULT_POLL_INTERVAL)

    def test_read_only(self):
        options = HelperOptions(origin=TEST_ORIGIN)

        with self.assertRaises(dataclasses.FrozenInstanceError):
            options.origin = "http://example.com"

    def test_origin_must_be_absolute(self):
        for origin in ["", "/widgets", "localhost:9000", "ftp://localhost", None]:
            with self.subTest(origin=origin):
                with self.assertRaises(ConfigError) as ctx:
                    HelperOptions(origin=origin)
                self.assertEqual(ctx.exception.details["field"], "origin")

    def test_timing_must_be_positive(self):
        with self.assertRaises(ConfigError):
            HelperOptions(origin=TEST_ORIGIN, default_timeout=0)
        with self.assertRaises(ConfigError):
            HelperOptions(origin=TEST_ORIGIN, poll_interval=-5)

    def test_numeric_strings_are_converted(self):
        options = HelperOptions(origin=TEST_ORIGIN, default_timeout="2500")

        self.assertEqual(options.default_timeout, 2500)

    def test_empty_loader_selector(self):
        with self.assertRaises(ConfigError):
            HelperOptions(origin=TEST_ORIGIN, loader_selector="")


class TestSettings(unittest.TestCase):
    """Test case for application settings."""

    def test_helper_options(self):
        settings = Settings(origin=TEST_ORIGIN, loader_selector=".spinner", default_timeout=500)
        options = settings.helper_options()

        self.assertEqual(options, HelperOptions(origin=TEST_ORIGIN, loader_selector=".spinner", default_timeout=500))

    def test_invalid_browser_type(self):
        with self.assertRaises(ConfigError):
            Settings(origin=TEST_ORIGIN, browser_type="netscape")

    def test_invalid_origin_fails_early(self):
        with self.assertRaises(ConfigError):
            Settings(origin="not a url")

    @patch.dict(os.environ, {
        "HELPERS_ORIGIN": "http://localhost:9000",
        "HELPERS_LOADER_SELECTOR": ".busy",
        "HELPERS_DEFAULT_TIMEOUT": "3000",
        "BROWSER_HEADLESS": "false",
        "BROWSER_TYPE": "firefox",
        "LOG_LEVEL": "DEBUG",
    })
    def test_from_env(self):
        settings = Settings.from_env()

        self.assertEqual(settings.origin, "http://localhost:9000")
        self.assertEqual(settings.loader_selector, ".busy")
        self.assertEqual(settings.default_timeout, 3000)
        self.assertFalse(settings.headless)
        self.assertEqual(settings.browser_type, "firefox")
        self.assertEqual(settings.log_level, "DEBUG")

    @patch.dict(os.environ, {"HELPERS_ORIGIN": "http://localhost:9000"})
    def test_from_env_overrides(self):
        settings = Settings.from_env(origin="http://127.0.0.1:8080", headless=False)

        self.assertEqual(settings.origin, "http://127.0.0.1:8080")
        self.assertFalse(settings.headless)
        self.assertEqual(settings.loader_selector, DEFAULT_LOADER_SELECTOR)
        self.assertEqual(settings.default_timeout, DEFAULT_TIMEOUT)


if __name__ == '__main__':
    unittest.main()
