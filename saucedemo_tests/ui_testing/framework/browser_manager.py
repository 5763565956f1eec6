"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser process per manager (launch once, reuse for speed)
    - One fresh, isolated context + page per scenario (BrowserSession)
    - Guaranteed session close on every exit path
    - Browser configuration presets

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    sync_playwright,
)

from .element import ElementRef
from .locators import ElementNotFoundError, Locator


class BrowserSession:
    """
    Driver handle for one scenario: a single page in its own browser context.

    The session does not own the browser; closing it only disposes of the
    context (cookies, storage, page) it was created with.
    """

    def __init__(self, page: Page, context: Optional[BrowserContext] = None):
        self.page = page
        self._context = context
        self._closed = False

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str, wait_until: str = "load") -> None:
        logger.debug(f"Navigate: {url}")
        self.page.goto(url, wait_until=wait_until)

    @property
    def current_url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    # =========================================================================
    # Element Lookup
    # =========================================================================

    def find_element(self, locator: Locator) -> ElementRef:
        """
        Resolve `locator` against the current DOM.

        Raises:
            ElementNotFoundError: When nothing matches
        """
        element = self.try_find(locator)
        if element is None:
            raise ElementNotFoundError(f"No element matches {locator}")
        return element

    def try_find(self, locator: Locator) -> Optional[ElementRef]:
        """Resolve `locator`, returning None when the element is absent."""
        handle = self.page.query_selector(locator.selector)
        if handle is None:
            return None
        return ElementRef(handle, locator)

    def find_elements(self, locator: Locator) -> List[ElementRef]:
        return [
            ElementRef(handle, locator)
            for handle in self.page.query_selector_all(locator.selector)
        ]

    # =========================================================================
    # Diagnostics & Lifecycle
    # =========================================================================

    def screenshot(self, full_page: bool = False) -> bytes:
        return self.page.screenshot(full_page=full_page)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the page and its context. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if self._context is not None:
            self._context.close()
        else:
            self.page.close()
        logger.debug("Browser session closed")


class BrowserManager:
    """
    Manages the browser process and hands out per-scenario sessions.

    Usage:
        with BrowserManager(browser_type="chromium") as manager:
            with manager.session() as session:
                session.navigate("https://www.saucedemo.com/")
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    BROWSER_TYPES = ("chromium", "firefox", "webkit")

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
        default_timeout_ms: Optional[float] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode
            browser_type: Browser to use - 'chromium', 'firefox', 'webkit'
            default_timeout_ms: Playwright default timeout for page actions
        """
        if browser_type not in self.BROWSER_TYPES:
            raise ValueError(
                f"Unsupported browser '{browser_type}'. "
                f"Choose one of: {', '.join(self.BROWSER_TYPES)}"
            )
        self.headless = headless
        self.browser_type = browser_type
        self.default_timeout_ms = default_timeout_ms

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    def __enter__(self) -> "BrowserManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def start(self) -> None:
        """Start Playwright and launch browser."""
        if self._browser is not None:
            return
        self._playwright = sync_playwright().start()
        launcher = getattr(self._playwright, self.browser_type)

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }
        if self.browser_type != "chromium":
            launch_options.pop("args", None)

        self._browser = launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    def close(self) -> None:
        """Close browser and stop Playwright."""
        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    def open_session(self, **context_options: Any) -> BrowserSession:
        """
        Create a fresh, isolated session. The caller must close it;
        prefer the `session()` context manager.
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        options = {**self.DEFAULT_CONTEXT_OPTIONS, **context_options}
        context = self._browser.new_context(**options)
        if self.default_timeout_ms is not None:
            context.set_default_timeout(self.default_timeout_ms)
        page = context.new_page()
        logger.debug("Browser session opened")
        return BrowserSession(page, context)

    @contextmanager
    def session(self, **context_options: Any) -> Iterator[BrowserSession]:
        """Yield a fresh session and close it however the block exits."""
        session = self.open_session(**context_options)
        try:
            yield session
        finally:
            session.close()

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
    "BrowserSession",
]
