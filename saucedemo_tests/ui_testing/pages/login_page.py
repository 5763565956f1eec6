"""
================================================================================
Login Page Object
================================================================================

Page Object for the SauceDemo login form.

Design goals:
  - Every selector lives in LOCATORS; flows and tests never embed selectors
  - Expected absence is an explicit None (`try_element`), not a caught error
  - Sync Playwright session injected by the caller

================================================================================
"""

from __future__ import annotations

from typing import Dict, List

import allure
from loguru import logger

from saucedemo_tests.ui_testing.framework.element import ElementRef
from saucedemo_tests.ui_testing.framework.locators import By, Locator, LocatorRegistry
from saucedemo_tests.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """Login page object."""

    URL_PATH = "/"
    PAGE_TITLE = "Swag Labs"

    LOCATORS = LocatorRegistry({
        "username_input": Locator(By.ID, "user-name", "Username field"),
        "password_input": Locator(By.ID, "password", "Password field"),
        "login_button": Locator(By.ID, "login-button", "Login button"),
        "error_container": Locator(
            By.CSS_SELECTOR, ".error-message-container", "Error message container"
        ),
        "error_message": Locator(By.TEST_ID, "error", "Error message text"),
        "error_close_button": Locator(
            By.CSS_SELECTOR, ".error-button, svg.fa-times", "Error close button"
        ),
        # Red 'x' icons rendered inside both input fields while an error is shown
        "error_icon": Locator(
            By.CSS_SELECTOR, "svg.error_icon, svg.fa-times-circle", "Field error icon"
        ),
    })

    @allure.step("Open login page")
    def open(self) -> "LoginPage":
        """Navigate to the login page."""
        self.navigate()
        return self

    @allure.step("Login (username={username})")
    def login(self, username: str, password: str) -> None:
        """
        Fill both credentials and submit the form.

        Raises:
            ElementNotFoundError: If a form element is missing
        """
        self.fill("username_input", username)
        self.fill("password_input", password)
        self.click("login_button")
        logger.info(f"Submitted login for: {username}")

    def is_error_message_displayed(self) -> bool:
        """
        Visibility of the error message container.

        Raises:
            ElementNotFoundError: If the container is not in the DOM at all
        """
        return self.element("error_container").is_displayed()

    def error_message_text(self) -> str:
        """Text of the current error, or '' when no error is rendered."""
        element = self.try_element("error_message")
        return element.text if element is not None else ""

    @allure.step("Close error message")
    def close_error(self) -> None:
        self.click("error_close_button")

    def error_icons(self) -> List[ElementRef]:
        return self.session.find_elements(self.locator("error_icon"))

    @allure.step("Verify login form is displayed")
    def verify_form_displayed(self) -> bool:
        """Verify login form elements are visible."""
        return all(
            self.is_visible(name)
            for name in ("username_input", "password_input", "login_button")
        )

    def field_values(self) -> Dict[str, str]:
        return {
            "username": self.element("username_input").value,
            "password": self.element("password_input").value,
        }
