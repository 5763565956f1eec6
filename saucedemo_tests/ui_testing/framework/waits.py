# ================================================================================
# Wait-Until Poller
# ================================================================================
#
# Fixed-interval polling of page conditions against a live browser session.
#
# Key Features:
#   - Condition callables evaluated against the BrowserSession
#   - Fixed polling interval (no backoff), bounded by a timeout
#   - "Not found yet" / stale element signals count as "not yet satisfied"
#   - Every other error aborts the wait immediately
#   - Allure step + loguru logging per wait
#
# Usage:
#   wait = Wait(session, timeout=10)
#   error = wait.until(element_visible(LoginPage.LOCATORS["error_container"]))
#   wait.until(url_contains("inventory"))
#
# ================================================================================

from __future__ import annotations

import time
from typing import Any, Callable, Optional, Tuple, Type, Union

import allure
from loguru import logger

from .browser_manager import BrowserSession
from .element import ElementRef
from .locators import ElementNotFoundError, Locator, StaleElementError


Condition = Callable[[BrowserSession], Any]

DEFAULT_TIMEOUT = 10.0
DEFAULT_POLL_INTERVAL = 0.5

TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (
    ElementNotFoundError,
    StaleElementError,
)


class WaitTimeoutError(Exception):
    """Raised when a condition does not hold within the timeout."""

    def __init__(
        self,
        message: str,
        last_result: Any = None,
        last_error: Optional[BaseException] = None,
        elapsed: float = 0.0,
        attempts: int = 0,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.last_result = last_result
        self.last_error = last_error
        self.elapsed = elapsed
        self.attempts = attempts
        self.url = url


class Wait:
    """
    Polls a condition until it returns a truthy value or the timeout expires.

    Example:
        >>> wait = Wait(session, timeout=5, poll_interval=0.25)
        >>> wait.until(url_contains("inventory.html"))
        'https://www.saucedemo.com/inventory.html'
    """

    def __init__(
        self,
        session: BrowserSession,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        ignored_exceptions: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if timeout < 0:
            raise ValueError("timeout must be >= 0")
        if poll_interval <= 0:
            raise ValueError("poll_interval must be > 0")
        self.session = session
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.ignored_exceptions = ignored_exceptions
        self._clock = clock
        self._sleep = sleep

    def until(self, condition: Condition, message: str = "") -> Any:
        """
        Wait until `condition(session)` returns a truthy value.

        Returns:
            The truthy value returned by the condition

        Raises:
            WaitTimeoutError: If the condition never held within the timeout
        """
        description = message or describe(condition)

        def check() -> Tuple[bool, Any]:
            result = condition(self.session)
            return bool(result), result

        with allure.step(f"Wait until: {description}"):
            return self._poll(check, description, absent_means_done=False)

    def until_not(self, condition: Condition, message: str = "") -> bool:
        """
        Wait until `condition(session)` returns a falsy value.

        A transient "not found" / stale signal counts as falsy here.
        """
        description = message or f"not {describe(condition)}"

        def check() -> Tuple[bool, Any]:
            result = condition(self.session)
            return not result, result

        with allure.step(f"Wait until: {description}"):
            self._poll(check, description, absent_means_done=True)
        return True

    def _poll(
        self,
        check: Callable[[], Tuple[bool, Any]],
        description: str,
        absent_means_done: bool,
    ) -> Any:
        start = self._clock()
        deadline = start + self.timeout
        attempts = 0
        last_result: Any = None
        last_error: Optional[BaseException] = None

        logger.debug(f"Starting wait: {description} (timeout={self.timeout}s)")

        while True:
            attempts += 1
            try:
                done, result = check()
                last_result = result
                if done:
                    logger.debug(
                        f"Wait successful after {attempts} attempts "
                        f"({self._clock() - start:.2f}s): {description}"
                    )
                    return result if not absent_means_done else True
            except self.ignored_exceptions as e:
                last_error = e
                if absent_means_done:
                    logger.debug(f"Wait successful (element gone): {description}")
                    return True

            now = self._clock()
            if now >= deadline:
                elapsed = now - start
                error_msg = (
                    f"Timeout after {elapsed:.1f}s waiting for: {description}. "
                    f"Last result: {last_result!r}, Last error: {last_error}"
                )
                logger.error(error_msg)
                raise WaitTimeoutError(
                    error_msg,
                    last_result=last_result,
                    last_error=last_error,
                    elapsed=elapsed,
                    attempts=attempts,
                    url=self.session.current_url,
                )

            self._sleep(min(self.poll_interval, deadline - now))


# ================================================================================
# Conditions
# ================================================================================

def describe(condition: Condition) -> str:
    return getattr(condition, "description", None) or getattr(
        condition, "__name__", repr(condition)
    )


def _described(text: str, fn: Condition) -> Condition:
    fn.description = text  # type: ignore[attr-defined]
    return fn


def element_present(locator: Locator) -> Condition:
    """Element exists in the DOM; returns its ElementRef."""
    def condition(session: BrowserSession) -> ElementRef:
        return session.find_element(locator)
    return _described(f"{locator} is present", condition)


def element_visible(locator: Locator) -> Condition:
    """Element exists and is displayed; returns its ElementRef."""
    def condition(session: BrowserSession) -> Union[ElementRef, bool]:
        element = session.find_element(locator)
        return element if element.is_displayed() else False
    return _described(f"{locator} is visible", condition)


def element_invisible(target: Union[Locator, ElementRef]) -> Condition:
    """Element is hidden, detached or absent."""
    def condition(session: BrowserSession) -> bool:
        if isinstance(target, Locator):
            element = session.try_find(target)
            if element is None:
                return True
        else:
            element = target
        try:
            return not element.is_displayed()
        except StaleElementError:
            return True
    name = target if isinstance(target, Locator) else target.name
    return _described(f"{name} is invisible", condition)


def url_contains(substring: str) -> Condition:
    """Current URL contains `substring`; returns the URL."""
    def condition(session: BrowserSession) -> Union[str, bool]:
        url = session.current_url
        return url if substring in url else False
    return _described(f"URL contains {substring!r}", condition)


def title_is(title: str) -> Condition:
    def condition(session: BrowserSession) -> bool:
        return session.title() == title
    return _described(f"title is {title!r}", condition)


def text_contains(locator: Locator, text: str) -> Condition:
    """Element text contains `text`; returns its ElementRef."""
    def condition(session: BrowserSession) -> Union[ElementRef, bool]:
        element = session.find_element(locator)
        return element if text in element.text else False
    return _described(f"{locator} contains {text!r}", condition)


__all__ = [
    "Wait",
    "WaitTimeoutError",
    "TRANSIENT_ERRORS",
    "element_present",
    "element_visible",
    "element_invisible",
    "url_contains",
    "title_is",
    "text_contains",
]
