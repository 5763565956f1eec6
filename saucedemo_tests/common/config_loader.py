"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (config/config.yaml by default)
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Dot notation path access with defaults
    - Typed snapshot of the UI settings used by pages and flows

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

_TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def env_key(key: str) -> str:
    """Environment variable overriding a dot-notation key: ui.base_url -> UI_BASE_URL."""
    return key.upper().replace(".", "_")


def _coerce(raw: str, reference: Any) -> Any:
    """Convert an environment string to the type of `reference` when possible."""
    if isinstance(reference, bool):
        return raw.lower() in _TRUE_VALUES
    for kind in (int, float):
        if isinstance(reference, kind):
            try:
                return kind(raw)
            except ValueError:
                logger.warning(f"Cannot convert {raw!r} to {kind.__name__}; using the raw string")
                return raw
    return raw


class ConfigLoader:
    """
    One YAML configuration file plus environment overrides.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL)
        2. YAML configuration file
        3. Default values passed to `get`

    Every `ConfigLoader(path)` reads `path`. The repository file is shared
    through `ConfigLoader.default()`.

    Usage:
        >>> config = ConfigLoader.default()
        >>> config.get("ui.base_url", "https://www.saucedemo.com/")
        'https://www.saucedemo.com/'

        >>> ConfigLoader("staging.yaml").get("ui.timeout", 10.0)
        20.0
    """

    _default: Optional["ConfigLoader"] = None

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        """
        Args:
            config_path: YAML file to read. Uses DEFAULT_CONFIG_PATH if not specified.

        Raises:
            ConfigurationError: The file is not valid YAML
        """
        self.path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._data: Dict[str, Any] = self._read(self.path)

    @classmethod
    def default(cls) -> "ConfigLoader":
        """Process-wide loader for the repository config, created on first use."""
        if cls._default is None:
            cls._default = cls()
        return cls._default

    @classmethod
    def reset(cls) -> None:
        """Forget the shared default loader (tests reload with different settings)."""
        cls._default = None

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.warning(
                f"Configuration file not found: {path}. "
                f"Using defaults and environment variables only."
            )
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {path} must be a mapping")
        logger.debug(f"Loaded configuration from: {path}")
        return data

    def reload(self) -> None:
        """Re-read the file this loader was created with."""
        self._data = self._read(self.path)
        logger.info(f"Configuration reloaded from: {self.path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value at dot-notation `key`; environment first, then YAML, then `default`.

        Environment strings are converted to the type of `default`.
        """
        raw = os.environ.get(env_key(key))
        if raw is not None:
            return _coerce(raw, default)

        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def __repr__(self) -> str:
        return f"ConfigLoader({str(self.path)!r})"


@dataclass(frozen=True)
class UiSettings:
    """Snapshot of the `ui` section consumed by pages and flows."""
    base_url: str = "https://www.saucedemo.com/"
    password: str = "secret_sauce"
    browser: str = "chromium"
    headless: bool = True
    timeout: float = 10.0
    poll_interval: float = 0.5
    action_timeout_ms: float = 15000.0
    glitch_threshold_ms: float = 5000.0

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "UiSettings":
        config = config or ConfigLoader.default()
        defaults = cls()
        return cls(
            base_url=config.get("ui.base_url", defaults.base_url),
            password=config.get("ui.password", defaults.password),
            browser=config.get("ui.browser", defaults.browser),
            headless=config.get("ui.headless", defaults.headless),
            timeout=float(config.get("ui.timeout", defaults.timeout)),
            poll_interval=float(config.get("ui.poll_interval", defaults.poll_interval)),
            action_timeout_ms=float(
                config.get("ui.action_timeout_ms", defaults.action_timeout_ms)
            ),
            glitch_threshold_ms=float(
                config.get("ui.glitch_threshold_ms", defaults.glitch_threshold_ms)
            ),
        )

    def with_overrides(self, browser: Optional[str] = None, headed: bool = False) -> "UiSettings":
        """Apply command line browser options on top of the configured ones."""
        return replace(
            self,
            browser=browser or self.browser,
            headless=self.headless and not headed,
        )


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "UiSettings",
    "env_key",
]
