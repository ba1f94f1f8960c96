"""
nsbus Time - Public API
========================
"""

from nsbus.time.clock import Clock, FixedClock, SystemClock

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
]
