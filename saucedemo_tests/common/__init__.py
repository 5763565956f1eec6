"""
Shared configuration and logging for the SauceDemo login suite.
"""

from .config_loader import ConfigLoader, ConfigurationError, UiSettings
from .logging_setup import get_logger, init_logger

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "UiSettings",
    "init_logger",
    "get_logger",
]
