"""Shareholder registry in SQLite with role-based editing, a command line and reports."""

__version__ = "0.1.0"