"""
Configuration for the Golf Genius client.
"""

from .settings import Settings, configure, get_settings, reset_settings

__all__ = [
    "Settings",
    "configure",
    "get_settings",
    "reset_settings",
]
