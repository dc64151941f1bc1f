"""Detect package manifest version changes in CI events."""

__version__ = "0.3.0"
