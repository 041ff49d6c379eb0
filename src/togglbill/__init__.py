"""Toggl billing policy reconciliation."""

__version__ = "0.1.0"
