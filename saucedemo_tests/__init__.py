"""
SauceDemo login test suite package.

Kept importable to support:
  - IDE navigation
  - the programmatic runner (`run_tests.py`)
  - scenario reuse outside pytest (`ui_testing.flows.run_scenario`)

Credentials are the public SauceDemo demo accounts.
"""
