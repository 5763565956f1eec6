"""
================================================================================
Element Reference
================================================================================

Point-in-time handle to a resolved DOM element.

An ElementRef wraps a Playwright ElementHandle. It is not re-resolved: once
the page navigates or the node is removed, every call raises
StaleElementError and the caller must look the element up again.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from loguru import logger
from playwright.sync_api import ElementHandle
from playwright.sync_api import Error as PlaywrightError

from .locators import Locator, StaleElementError


T = TypeVar("T")

# Playwright reports detached handles with these message fragments
_STALE_MARKERS = (
    "not attached to the dom",
    "element is not attached",
    "element handle is disposed",
)


def _is_stale_error(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in _STALE_MARKERS)


class ElementRef:
    """
    Resolved element with a small, synchronous interaction surface.

    Usage:
        >>> ref = session.find_element(Locator(By.ID, "user-name"))
        >>> ref.clear()
        >>> ref.send_keys("standard_user")
        >>> ref.is_displayed()
        True
    """

    def __init__(self, handle: ElementHandle, locator: Optional[Locator] = None):
        self._handle = handle
        self.locator = locator

    def _call(self, action: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except PlaywrightError as e:
            if _is_stale_error(e):
                raise StaleElementError(
                    f"Element {self.name} is stale during {action}: {e}"
                ) from e
            raise

    @property
    def name(self) -> str:
        return str(self.locator) if self.locator else "<element>"

    def is_displayed(self) -> bool:
        """Visibility; a detached element is reported as not displayed."""
        try:
            return self._call("is_displayed", self._handle.is_visible)
        except StaleElementError:
            return False

    def is_enabled(self) -> bool:
        return self._call("is_enabled", self._handle.is_enabled)

    @property
    def text(self) -> str:
        """Rendered text of the element (empty for form inputs)."""
        return self._call("text", self._handle.inner_text) or ""

    @property
    def value(self) -> str:
        """Current value of an input/textarea/select."""
        return self._call("value", self._handle.input_value) or ""

    def get_attribute(self, name: str) -> Optional[str]:
        return self._call("get_attribute", lambda: self._handle.get_attribute(name))

    def clear(self) -> None:
        self._call("clear", lambda: self._handle.fill(""))

    def send_keys(self, text: str) -> None:
        """Append `text` to the current value of an input."""
        self._call("send_keys", lambda: self._handle.fill(self._handle.input_value() + text))

    def click(self, **kwargs: Any) -> None:
        logger.debug(f"Click: {self.name}")
        self._call("click", lambda: self._handle.click(**kwargs))

    def __repr__(self) -> str:
        return f"ElementRef({self.name})"


__all__ = [
    "ElementRef",
]
