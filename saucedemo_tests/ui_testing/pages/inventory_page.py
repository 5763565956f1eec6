"""
================================================================================
Inventory Page Object
================================================================================

Product listing shown after a successful login.

================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure

from saucedemo_tests.ui_testing.framework.locators import By, Locator, LocatorRegistry
from saucedemo_tests.ui_testing.framework.page_base import BasePage
from saucedemo_tests.ui_testing.framework.waits import element_visible, url_contains


class InventoryPage(BasePage):
    """Inventory page object."""

    URL_PATH = "/inventory.html"
    PAGE_TITLE = "Swag Labs"
    URL_MARKER = "inventory"

    LOCATORS = LocatorRegistry({
        "inventory_container": Locator(By.ID, "inventory_container", "Inventory container"),
        "title": Locator(By.CLASS_NAME, "title", "Page title"),
        "inventory_item": Locator(By.CLASS_NAME, "inventory_item", "Inventory item"),
        "item_image": Locator(By.CSS_SELECTOR, "img.inventory_item_img", "Item image"),
    })

    @allure.step("Wait for inventory page")
    def wait_loaded(self, timeout: Optional[float] = None) -> None:
        """
        Wait for the post-login URL and the inventory container.

        Raises:
            WaitTimeoutError: If either does not show up in time
        """
        self.wait_until(url_contains(self.URL_MARKER), timeout)
        self.wait_until(element_visible(self.locator("inventory_container")), timeout)

    def is_loaded(self) -> bool:
        return (
            self.URL_MARKER in self.session.current_url
            and self.is_visible("inventory_container")
        )

    def item_count(self) -> int:
        return len(self.session.find_elements(self.locator("inventory_item")))

    def item_image_sources(self) -> List[str]:
        return [
            image.get_attribute("src") or ""
            for image in self.session.find_elements(self.locator("item_image"))
        ]
