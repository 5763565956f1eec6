"""
================================================================================
Soft Assertions
================================================================================

Non-blocking assertion aggregator for UI scenarios.

Checks are recorded without raising, so one run shows every independent
defect. A single flush at the end of the scenario raises one aggregate
failure listing every failed message in recording order.

Example:
    with SoftAssert("locked out user") as soft:
        soft.require(page.verify_form_displayed(), "Login form is missing")
        soft.check(page.is_error_message_displayed(), "Error should be shown")
        soft.check_in("locked out", page.error_message_text(), "Wrong error")
    # flushed here; raises AggregateAssertionError if any check failed

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Container, List, Optional, Tuple

import allure
from loguru import logger


@dataclass(frozen=True)
class AssertionRecord:
    """Result of a single soft check."""
    passed: bool
    message: str


class AggregateAssertionError(AssertionError):
    """Raised by `SoftAssert.flush()` when at least one check failed."""

    def __init__(self, messages: List[str], scope: str = "", hard_error: Optional[str] = None):
        self.messages = list(messages)
        self.scope = scope
        self.hard_error = hard_error
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = f"[{self.scope}] " if self.scope else ""
        lines = [f"{prefix}{len(self.messages)} soft assertion(s) failed:"]
        lines.extend(f"  {i}. {msg}" for i, msg in enumerate(self.messages, start=1))
        if self.hard_error:
            lines.append(f"  aborted by: {self.hard_error}")
        return "\n".join(lines)


class UnflushedAssertionsError(RuntimeError):
    """Raised when a SoftAssert with records reaches scope end unflushed."""
    pass


class SoftAssert:
    """
    Collects pass/fail records for one scenario.

    Must be flushed exactly once, either explicitly via `flush()` or by
    leaving a `with` block.
    """

    def __init__(self, scope: str = ""):
        self.scope = scope
        self._records: List[AssertionRecord] = []
        self._flushed = False

    # =========================================================================
    # Recording
    # =========================================================================

    def check(self, predicate: Any, message: str) -> bool:
        """Record a soft check. Never raises on a failed predicate."""
        self._ensure_open()
        passed = bool(predicate)
        self._records.append(AssertionRecord(passed, message))
        if not passed:
            logger.warning(f"Soft assertion failed: {message}")
        return passed

    def check_equal(self, actual: Any, expected: Any, message: str) -> bool:
        return self.check(
            actual == expected,
            f"{message} (expected {expected!r}, got {actual!r})" if actual != expected else message,
        )

    def check_in(self, member: Any, container: Container, message: str) -> bool:
        try:
            passed = container is not None and member in container
        except TypeError:
            # not a container: recorded as a failure, never raised
            passed = False
        return self.check(
            passed,
            message if passed else f"{message} ({member!r} not in {container!r})",
        )

    def fail(self, message: str) -> bool:
        return self.check(False, message)

    def require(self, predicate: Any, message: str) -> None:
        """
        Hard check: raise immediately when `predicate` is falsy.

        Raises:
            AssertionError: On failure
        """
        self._ensure_open()
        if not predicate:
            logger.error(f"Required assertion failed: {message}")
            raise AssertionError(message)
        self._records.append(AssertionRecord(True, message))

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def records(self) -> Tuple[AssertionRecord, ...]:
        return tuple(self._records)

    @property
    def failures(self) -> List[str]:
        return [r.message for r in self._records if not r.passed]

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def flushed(self) -> bool:
        return self._flushed

    # =========================================================================
    # Flushing
    # =========================================================================

    def flush(self, hard_error: Optional[BaseException] = None) -> None:
        """
        End the scope.

        Raises:
            AggregateAssertionError: When any check failed, or when
                `hard_error` is given (its message is appended)
            RuntimeError: When called a second time
        """
        if self._flushed:
            raise RuntimeError(f"SoftAssert '{self.scope}' was already flushed")
        self._flushed = True

        failures = self.failures
        total = len(self._records)
        if not failures and hard_error is None:
            logger.debug(f"Soft assertions passed: {total}/{total} ({self.scope})")
            return

        hard_text = f"{type(hard_error).__name__}: {hard_error}" if hard_error else None
        error = AggregateAssertionError(failures, scope=self.scope, hard_error=hard_text)
        allure.attach(
            str(error),
            name="Soft assertion failures",
            attachment_type=allure.attachment_type.TEXT,
        )
        logger.error(str(error))
        raise error

    def verify_flushed(self) -> None:
        """
        Scope-exit check for code paths that never flushed.

        Raises:
            UnflushedAssertionsError: When records exist but flush never ran
        """
        if self._flushed or not self._records:
            return
        raise UnflushedAssertionsError(
            f"SoftAssert '{self.scope}' was never flushed; "
            f"{len(self.failures)} failure(s) would be lost: {self.failures}"
        )

    def _ensure_open(self) -> None:
        if self._flushed:
            raise RuntimeError(f"SoftAssert '{self.scope}' is already flushed")

    def __enter__(self) -> "SoftAssert":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None:
            self.flush()
            return False
        if self._flushed:
            return False
        if not self.failures:
            # Nothing soft to report; let the hard error surface unchanged
            self._flushed = True
            return False
        try:
            self.flush(hard_error=exc_val)
        except AggregateAssertionError as aggregate:
            raise aggregate from exc_val
        return False

    def __repr__(self) -> str:
        return (
            f"SoftAssert(scope={self.scope!r}, records={len(self._records)}, "
            f"failures={len(self.failures)}, flushed={self._flushed})"
        )


__all__ = [
    "AssertionRecord",
    "AggregateAssertionError",
    "SoftAssert",
    "UnflushedAssertionsError",
]
