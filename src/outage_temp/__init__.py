"""Outage duration vs. ambient temperature: source reconciliation and analysis."""

__version__ = "0.1.0"
