"""
rulesync configuration.

Settings come from RULESYNC_* environment variables or a local .env file.
"""

from rulesync.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
