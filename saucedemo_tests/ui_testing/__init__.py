"""UI automation: framework, page objects, flows and live tests."""
