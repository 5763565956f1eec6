"""
Repository-level pytest configuration.

Why this exists:
  - Register command line options shared by every suite
  - Keep live browser runs opt-in (they need network access and a
    Playwright browser install)
"""

from __future__ import annotations

from pathlib import Path

import pytest


pytest_plugins = ["pytester"]


def pytest_addoption(parser):
    group = parser.getgroup("saucedemo", "SauceDemo login suite")
    group.addoption(
        "--run-ui",
        action="store_true",
        default=False,
        help="Run live browser tests against the configured base URL",
    )
    group.addoption(
        "--ui-browser",
        action="store",
        default=None,
        choices=["chromium", "firefox", "webkit"],
        help="Browser engine for UI tests (default: ui.browser from config)",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
