"""
nsbus Config - Public API
==========================
"""

from nsbus.config.settings import DEFAULT_SETTINGS, BusSettings

__all__ = [
    "BusSettings",
    "DEFAULT_SETTINGS",
]
