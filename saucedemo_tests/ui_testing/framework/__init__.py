"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based (sync API) Page Object + Wait/Assert harness.

Components:
    - locators: immutable Locator Registry and lookup errors
    - element: point-in-time element references
    - browser_manager: browser lifecycle and per-scenario sessions
    - waits: fixed-interval Wait-Until poller and conditions
    - soft_assert: non-blocking assertion aggregator
    - page_base: base page object

Author: Automation Team
License: MIT
================================================================================
"""

from .locators import (
    By,
    ElementNotFoundError,
    Locator,
    LocatorRegistry,
    StaleElementError,
    UnknownElementError,
)
from .element import ElementRef
from .browser_manager import BrowserManager, BrowserSession
from .waits import (
    Wait,
    WaitTimeoutError,
    element_invisible,
    element_present,
    element_visible,
    text_contains,
    title_is,
    url_contains,
)
from .soft_assert import (
    AggregateAssertionError,
    AssertionRecord,
    SoftAssert,
    UnflushedAssertionsError,
)
from .page_base import BasePage

__all__ = [
    "By",
    "Locator",
    "LocatorRegistry",
    "ElementNotFoundError",
    "UnknownElementError",
    "StaleElementError",
    "ElementRef",
    "BrowserManager",
    "BrowserSession",
    "Wait",
    "WaitTimeoutError",
    "element_present",
    "element_visible",
    "element_invisible",
    "url_contains",
    "title_is",
    "text_contains",
    "AggregateAssertionError",
    "AssertionRecord",
    "SoftAssert",
    "UnflushedAssertionsError",
    "BasePage",
]
