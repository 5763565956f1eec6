"""
Test data for the SauceDemo login suite.
"""

from .personas import PERSONA_KEYS, Persona, get_persona, invalid_password

__all__ = [
    "PERSONA_KEYS",
    "Persona",
    "get_persona",
    "invalid_password",
]
