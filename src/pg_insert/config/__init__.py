"""Configuration management for pg-insert.

Usage:
    >>> from pg_insert.config import get_settings
    >>> settings = get_settings()
    >>> settings.validate_rows
    True
"""

from pg_insert.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
