"""Dayboard - a personal task list grouped by day and by category."""

__version__ = "0.1.0"
