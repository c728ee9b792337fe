"""Switchboard - agent dashboard API and integration schema catalog."""

__version__ = "1.0.0"
