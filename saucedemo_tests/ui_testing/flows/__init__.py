"""
================================================================================
Scenario Flows
================================================================================

Persona login scenarios composed from page objects, waits and soft
assertions. Each scenario runs against an injected BrowserSession.

================================================================================
"""

from .login_flows import SCENARIOS, run_scenario

__all__ = [
    "SCENARIOS",
    "run_scenario",
]
