"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Registry-based element lookup (no raw selectors in tests)
    - Common page interactions
    - Wait strategies
    - Screenshot and debugging utilities

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import allure
from loguru import logger

from .browser_manager import BrowserSession
from .element import ElementRef
from .locators import Locator, LocatorRegistry
from .waits import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT, Condition, Wait


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    A page object binds a BrowserSession to the page's LocatorRegistry and
    keeps no other state.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/"
            LOCATORS = LocatorRegistry({
                "username_input": Locator(By.ID, "user-name"),
                ...
            })

            def login(self, username: str, password: str) -> None:
                self.fill("username_input", username)
                self.fill("password_input", password)
                self.click("login_button")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""
    LOCATORS: LocatorRegistry = LocatorRegistry({})

    def __init__(
        self,
        session: BrowserSession,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        """
        Initialize page object.

        Args:
            session: Driver handle; its lifetime is managed by the caller
            base_url: Base URL for the application
            timeout: Default wait timeout in seconds
            poll_interval: Default wait polling interval in seconds
        """
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.poll_interval = poll_interval

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}/{self.URL_PATH.lstrip('/')}"

    def navigate(self) -> None:
        """Navigate to this page."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            self.session.navigate(self.url)
            logger.debug(f"Navigated to: {self.url}")

    # =========================================================================
    # Element Lookup
    # =========================================================================

    def locator(self, name: str) -> Locator:
        return self.LOCATORS.lookup(name)

    def element(self, name: str) -> ElementRef:
        """
        Resolve a registered element.

        Raises:
            UnknownElementError: Name not in LOCATORS
            ElementNotFoundError: Element absent from the DOM
        """
        return self.session.find_element(self.locator(name))

    def try_element(self, name: str) -> Optional[ElementRef]:
        """Resolve a registered element, or None when it is absent."""
        return self.session.try_find(self.locator(name))

    # =========================================================================
    # Interactions
    # =========================================================================

    def fill(self, name: str, value: str) -> None:
        """Clear an input and type `value` into it."""
        shown = "*" * len(value) if "password" in name.lower() else value
        with allure.step(f"Fill {name}: {shown}"):
            element = self.element(name)
            element.clear()
            element.send_keys(value)

    def click(self, name: str, **kwargs: Any) -> None:
        with allure.step(f"Click: {name}"):
            self.element(name).click(**kwargs)

    def is_visible(self, name: str) -> bool:
        """Visibility of a registered element; False when absent."""
        element = self.try_element(name)
        return element is not None and element.is_displayed()

    def get_text(self, name: str) -> str:
        return self.element(name).text

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    def wait(self, timeout: Optional[float] = None) -> Wait:
        return Wait(
            self.session,
            timeout=self.timeout if timeout is None else timeout,
            poll_interval=self.poll_interval,
        )

    def wait_until(self, condition: Condition, timeout: Optional[float] = None, message: str = "") -> Any:
        return self.wait(timeout).until(condition, message)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        data = self.session.screenshot(full_page=full_page)
        filepath.write_bytes(data)

        if attach_to_allure:
            allure.attach(
                data,
                name=name,
                attachment_type=allure.attachment_type.PNG
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "BasePage",
]
