"""
Configuration package for the Wayfinder API.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    SecuritySettings,
    NearbySettings,
    settings,
    get_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "SecuritySettings",
    "NearbySettings",
    "settings",
    "get_settings",
]
