"""Summarize a day of ActivityWatch activity into time-bucketed text."""

__version__ = "0.1.0"
