"""Recurring investment projection service (NZ fees and tax rules)."""

__version__ = "0.1.0"
