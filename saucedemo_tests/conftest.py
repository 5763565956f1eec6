"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers, initializes logging and provides shared fixtures.

================================================================================
"""

import os
from pathlib import Path
from typing import Generator, Optional

import pytest

from saucedemo_tests.common.logging_setup import init_logger
from saucedemo_tests.ui_testing.framework.soft_assert import SoftAssert


def _ui_enabled(config) -> bool:
    return bool(config.getoption("--run-ui", default=False)) or os.getenv(
        "RUN_UI_TESTS", ""
    ).lower() in ("1", "true", "yes", "on")


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "nondeterministic: Timing-dependent checks against a remote site"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Live browser tests (opt-in with --run-ui)"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests without a browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )

    init_logger()


def _suite_of(item_path, rootpath) -> Optional[str]:
    """
    Suite an item belongs to, judged by its path below the rootdir.

    Directories above the rootdir (the checkout location) are ignored.
    """
    path = Path(item_path)
    try:
        parts = path.relative_to(rootpath).parts
    except ValueError:
        return None
    if "ui_testing" in parts:
        return "ui"
    if "unit" in parts:
        return "unit"
    return None


def pytest_collection_modifyitems(config, items):
    """
    Auto-mark tests by location and skip live UI tests unless enabled.
    """
    skip_ui = pytest.mark.skip(reason="live UI tests are opt-in: use --run-ui or RUN_UI_TESTS=1")
    run_ui = _ui_enabled(config)

    for item in items:
        suite = _suite_of(item.path, config.rootpath)
        if suite == "ui":
            item.add_marker(pytest.mark.ui)
            if not run_ui:
                item.add_marker(skip_ui)
        elif suite == "unit":
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "SauceDemo Login UI Suite",
        f"Live UI tests: {'enabled' if _ui_enabled(config) else 'disabled'}",
        "=" * 60,
        "",
    ]


@pytest.fixture
def soft_assert(request) -> Generator[SoftAssert, None, None]:
    """
    Per-test soft assertion aggregator.

    Tests call `soft_assert.flush()` at the end; a test that records checks
    but never flushes errors at teardown instead of passing silently.
    """
    soft = SoftAssert(request.node.name)
    yield soft
    soft.verify_flushed()
