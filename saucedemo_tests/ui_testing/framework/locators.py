"""
================================================================================
Locator Registry
================================================================================

Immutable element locators shared by Page Objects and scenario flows.

Features:
    - Strategy-based locators (id, css, class name, name, xpath, data-test)
    - One registry per page type, built once and never mutated
    - Translation to Playwright selector engines

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple


class ElementNotFoundError(Exception):
    """Raised when a locator resolves to nothing on the current page."""
    pass


class UnknownElementError(KeyError):
    """Raised when a symbolic element name is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class StaleElementError(Exception):
    """Raised when an element reference no longer points into the DOM."""
    pass


class By(str, Enum):
    """Supported lookup strategies."""
    ID = "id"
    CSS_SELECTOR = "css selector"
    CLASS_NAME = "class name"
    NAME = "name"
    XPATH = "xpath"
    TEST_ID = "data-test"


@dataclass(frozen=True)
class Locator:
    """
    A (strategy, value) pair.

    Attributes:
        strategy: Lookup strategy
        value: Strategy-specific value (id, selector, class, ...)
        description: Human-readable name for logs and reports
    """
    strategy: By
    value: str
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.strategy, By):
            object.__setattr__(self, "strategy", By(self.strategy))
        if not self.value:
            raise ValueError("Locator value must not be empty")

    @property
    def selector(self) -> str:
        """Playwright selector string for this locator."""
        if self.strategy is By.ID:
            return f"id={self.value}"
        if self.strategy is By.CSS_SELECTOR:
            return f"css={self.value}"
        if self.strategy is By.CLASS_NAME:
            return f"css=.{self.value}"
        if self.strategy is By.NAME:
            return f'css=[name="{self.value}"]'
        if self.strategy is By.XPATH:
            return f"xpath={self.value}"
        return f"data-test={self.value}"

    def __str__(self) -> str:
        label = self.description or self.value
        return f"{label} ({self.strategy.value}={self.value!r})"


class LocatorRegistry(Mapping[str, Locator]):
    """
    Read-only mapping from symbolic element name to a single Locator.

    Usage:
        >>> registry = LocatorRegistry({
        ...     "login_button": Locator(By.ID, "login-button"),
        ... })
        >>> registry.lookup("login_button").selector
        'id=login-button'
    """

    def __init__(self, locators: Mapping[str, Locator]):
        for name, locator in locators.items():
            if not isinstance(locator, Locator):
                raise TypeError(
                    f"Registry entry '{name}' must be a Locator, "
                    f"got {type(locator).__name__}"
                )
        self._locators: Mapping[str, Locator] = MappingProxyType(dict(locators))

    def lookup(self, name: str) -> Locator:
        """
        Get the locator registered under `name`.

        Raises:
            UnknownElementError: When the name is not registered
        """
        try:
            return self._locators[name]
        except KeyError:
            raise UnknownElementError(
                f"Unknown element '{name}'. Registered: {', '.join(sorted(self._locators))}"
            ) from None

    def names(self) -> Tuple[str, ...]:
        return tuple(self._locators)

    def extend(self, **more: Locator) -> "LocatorRegistry":
        """Return a new registry with additional entries (overrides allowed)."""
        merged: Dict[str, Locator] = dict(self._locators)
        merged.update(more)
        return LocatorRegistry(merged)

    def __getitem__(self, name: str) -> Locator:
        return self.lookup(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._locators)

    def __len__(self) -> int:
        return len(self._locators)

    def __repr__(self) -> str:
        return f"LocatorRegistry({list(self._locators)})"


__all__ = [
    "By",
    "Locator",
    "LocatorRegistry",
    "ElementNotFoundError",
    "UnknownElementError",
    "StaleElementError",
]
