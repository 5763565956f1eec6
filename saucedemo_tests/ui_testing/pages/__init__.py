"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the SauceDemo pages.

Each page class encapsulates:
    - An immutable LocatorRegistry
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .inventory_page import InventoryPage

__all__ = [
    "LoginPage",
    "InventoryPage",
]
