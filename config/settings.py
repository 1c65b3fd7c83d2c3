"""
Configuration settings for the page helpers.

This module defines the helper options (origin, loader selector, wait timing)
and the launch settings used when the helpers start their own browser.
"""

import os
from typing import List, Optional
from dataclasses import dataclass, field

from utils.errors import ConfigError, ValidationError
from utils.validation import require_url, require_integer, validate_string

DEFAULT_LOADER_SELECTOR = '[data-test="loader"]:not(.hidden)'
DEFAULT_TIMEOUT = 10000      # 10 seconds
DEFAULT_POLL_INTERVAL = 100  # milliseconds between checks of a wait condition


@dataclass(frozen=True)
class HelperOptions:
    """
    Options fixed when a page is extended with helpers.

    ``origin`` is the base URL of the test server, e.g.
    ``http://localhost:8080``; ``load()`` prefixes it to root-relative paths.
    ``loader_selector`` identifies blocking loaders that every wait lets
    clear before looking at the page.
    """
    origin: str
    loader_selector: str = DEFAULT_LOADER_SELECTOR
    default_timeout: int = DEFAULT_TIMEOUT
    poll_interval: int = DEFAULT_POLL_INTERVAL

    def __post_init__(self):
        """Validate options after initialization."""
        try:
            require_url(self.origin, "origin")
            if not validate_string(self.loader_selector, min_length=1):
                raise ValidationError("loader_selector must be a non-empty string", field="loader_selector")
            object.__setattr__(
                self, "default_timeout", require_integer(self.default_timeout, "default_timeout", min_value=1)
            )
            object.__setattr__(
                self, "poll_interval", require_integer(self.poll_interval, "poll_interval", min_value=1)
            )
        except ValidationError as e:
            raise ConfigError(e.message, e.details) from e


@dataclass
class Settings:
    """
    Global configuration settings for the application.
    """
    # Helper settings
    origin: str = field(default_factory=lambda: os.environ.get("HELPERS_ORIGIN", "http://localhost:8080"))
    loader_selector: str = DEFAULT_LOADER_SELECTOR
    default_timeout: int = DEFAULT_TIMEOUT
    poll_interval: int = DEFAULT_POLL_INTERVAL

    # Browser settings
    headless: bool = True
    browser_type: str = "chromium"  # "chromium", "firefox", or "webkit"
    browser_args: List[str] = field(default_factory=lambda: ["--disable-dev-shm-usage"])
    user_agent: Optional[str] = None
    viewport_width: int = 1280
    viewport_height: int = 720

    # Timeouts (in milliseconds)
    navigation_timeout: int = 30000  # 30 seconds
    action_timeout: int = 10000      # 10 seconds

    slow_mo: int = 0

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    json_logs: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        self.navigation_timeout = int(self.navigation_timeout)
        self.action_timeout = int(self.action_timeout)
        self.default_timeout = int(self.default_timeout)
        self.poll_interval = int(self.poll_interval)

        valid_browsers = ["chromium", "firefox", "webkit"]
        if self.browser_type not in valid_browsers:
            raise ConfigError(f"Browser type must be one of {valid_browsers}")

        # Fails early on a bad origin or timing value
        self.helper_options()

    def helper_options(self) -> HelperOptions:
        """
        Build the helper options described by these settings.

        Returns:
            Frozen helper options
        """
        return HelperOptions(
            origin=self.origin,
            loader_selector=self.loader_selector,
            default_timeout=self.default_timeout,
            poll_interval=self.poll_interval,
        )

    @classmethod
    def from_env(cls, **overrides) -> 'Settings':
        """
        Create Settings from environment variables.

        Args:
            **overrides: Values that take precedence over the environment

        Returns:
            Settings instance with values from environment variables
        """
        values = dict(
            origin=os.environ.get("HELPERS_ORIGIN", "http://localhost:8080"),
            loader_selector=os.environ.get("HELPERS_LOADER_SELECTOR", DEFAULT_LOADER_SELECTOR),
            default_timeout=int(os.environ.get("HELPERS_DEFAULT_TIMEOUT", DEFAULT_TIMEOUT)),
            poll_interval=int(os.environ.get("HELPERS_POLL_INTERVAL", DEFAULT_POLL_INTERVAL)),
            headless=os.environ.get("BROWSER_HEADLESS", "true").lower() == "true",
            browser_type=os.environ.get("BROWSER_TYPE", "chromium"),
            navigation_timeout=int(os.environ.get("NAVIGATION_TIMEOUT", 30000)),
            action_timeout=int(os.environ.get("ACTION_TIMEOUT", 10000)),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_file=os.environ.get("LOG_FILE") or None,
        )
        values.update(overrides)
        return cls(**values)
