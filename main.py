#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Page helpers - command-line smoke runner

Loads a page from a test server, waits for blocking loaders to clear and
optionally for a selector, then prints where the browser ended up. Handy for
checking a server and its loader markup before writing tests against it.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from browser.manager import BrowserManager
from config.settings import Settings
from utils.errors import HelperError, error_to_user_message, log_exception
from utils.logging import LogContext, setup_logging, setup_structured_logging

logger = logging.getLogger("page_helpers")


async def run_check(settings: Settings, args: argparse.Namespace) -> str:
    """
    Load the requested path and run the requested waits.

    Args:
        settings: Application settings
        args: Parsed command line arguments

    Returns:
        The URL the page ended up at
    """
    async with BrowserManager(settings) as manager:
        page = await manager.new_helpers()

        await page.load(args.path)
        await page.wait_for_loaders(args.timeout)

        if args.wait_for:
            if args.visible:
                await page.wait_for_element_to_be_visible(args.wait_for, args.timeout)
            else:
                await page.wait_for_element(args.wait_for, args.timeout)
            logger.info(f"Found {args.wait_for}")

        if args.expect_text:
            target = args.wait_for or "body"
            await page.wait_for_element_to_have_text(target, args.expect_text, args.timeout)
            logger.info(f"{target} contains {args.expect_text!r}")

        return page.url


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="Load a page and wait for it to settle")
    parser.add_argument(
        "--origin",
        type=str,
        default=None,
        help="Origin of the test server, e.g. http://localhost:8080 (default: $HELPERS_ORIGIN)"
    )
    parser.add_argument(
        "--path",
        type=str,
        default="/",
        help="Root-relative path to load"
    )
    parser.add_argument(
        "--wait-for",
        type=str,
        default=None,
        help="CSS selector to wait for after loading"
    )
    parser.add_argument(
        "--visible",
        action="store_true",
        help="Require the --wait-for element to be visible"
    )
    parser.add_argument(
        "--expect-text",
        type=str,
        default=None,
        help="Text the --wait-for element (or the body) must contain"
    )
    parser.add_argument(
        "--loader-selector",
        type=str,
        default=None,
        help="Selector of blocking loaders"
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Milliseconds for each wait"
    )
    parser.add_argument(
        "--browser",
        type=str,
        choices=["chromium", "firefox", "webkit"],
        default=None,
        help="Browser to launch"
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit structured JSON logs"
    )

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """
    Build settings from the environment, overridden by command line arguments.
    """
    overrides = {}
    if args.origin:
        overrides["origin"] = args.origin
    if args.loader_selector:
        overrides["loader_selector"] = args.loader_selector
    if args.timeout:
        overrides["default_timeout"] = args.timeout
    if args.browser:
        overrides["browser_type"] = args.browser
    if args.headed:
        overrides["headless"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.json_logs:
        overrides["json_logs"] = True

    return Settings.from_env(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.

    Returns:
        Process exit code
    """
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except HelperError as e:
        print(error_to_user_message(e), file=sys.stderr)
        return 1

    if settings.json_logs:
        setup_structured_logging(settings.log_level, settings.log_file)
    else:
        setup_logging(settings.log_level, settings.log_file)

    with LogContext(origin=settings.origin, path=args.path):
        try:
            url = asyncio.run(run_check(settings, args))
        except HelperError as e:
            log_exception(e, include_traceback=args.debug)
            print(error_to_user_message(e), file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt, shutting down...")
            return 130

    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
