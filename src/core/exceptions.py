"""Core exceptions."""

from __future__ import annotations


class SettingsError(Exception):
    """Configuration could not be loaded or failed validation (fatal at startup)."""
