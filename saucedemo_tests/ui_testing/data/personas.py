"""
================================================================================
User Personas
================================================================================

Named SauceDemo test accounts. Usernames come from the `users` config
section so a different deployment can rename them without code changes;
the shared password comes from the UiSettings the scenario runs with.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from saucedemo_tests.common.config_loader import ConfigLoader, UiSettings


# persona key -> (default username, login is expected to succeed)
_DEFAULTS: Dict[str, tuple] = {
    "standard": ("standard_user", True),
    "locked_out": ("locked_out_user", False),
    "problem": ("problem_user", True),
    "performance_glitch": ("performance_glitch_user", True),
    "error": ("error_user", True),
    "visual": ("visual_user", True),
    "invalid": ("invalid_user", False),
}

PERSONA_KEYS = tuple(_DEFAULTS)


@dataclass(frozen=True)
class Persona:
    """A test account and whether its login should reach the inventory."""
    key: str
    username: str
    password: str
    can_login: bool


def get_persona(
    key: str,
    settings: Optional[UiSettings] = None,
    config: Optional[ConfigLoader] = None,
) -> Persona:
    """
    Build a persona.

    Args:
        key: One of PERSONA_KEYS
        settings: Supplies the password; read from `config` when omitted
        config: Supplies the username (`users.<key>`); the shared default
            loader when omitted

    Raises:
        KeyError: Unknown persona key
    """
    if key not in _DEFAULTS:
        raise KeyError(f"Unknown persona '{key}'. Known: {', '.join(PERSONA_KEYS)}")
    config = config or ConfigLoader.default()
    settings = settings or UiSettings.from_config(config)
    default_username, can_login = _DEFAULTS[key]
    return Persona(
        key=key,
        username=config.get(f"users.{key}", default_username),
        password=settings.password,
        can_login=can_login,
    )


def invalid_password(config: Optional[ConfigLoader] = None) -> str:
    config = config or ConfigLoader.default()
    return config.get("users.invalid_password", "wrong_password")
