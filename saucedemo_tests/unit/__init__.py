"""Framework and flow tests that run without a browser."""
