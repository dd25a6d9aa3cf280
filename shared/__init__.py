"""Helpers shared by the API, UI, smoke and contract test suites."""
