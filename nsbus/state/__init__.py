"""
nsbus State - Public API
=========================
"""

from nsbus.state.store import (
    ABSENT,
    STATE_CHANGED,
    STATE_RESET,
    ReactiveStateStore,
)

__all__ = [
    "ABSENT",
    "STATE_CHANGED",
    "STATE_RESET",
    "ReactiveStateStore",
]
