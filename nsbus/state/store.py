"""
nsbus State - Reactive State Store
===================================
Flat key-value map whose every mutation publishes on an EventBus.

Events:
    state.changed  {"key": ..., "value": ..., "previous": ...}
    state.reset    {}

The map is updated before the event is published, so a subscriber
that reads the store from its callback sees the new value.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from nsbus.events.bus import EventBus

logger = logging.getLogger("nsbus.state")

STATE_CHANGED = "state.changed"
STATE_RESET = "state.reset"


class _Absent:
    """Marker for a key that has never been set (distinct from None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: dict) -> "_Absent":
        return self


ABSENT = _Absent()

_ALL = object()


class ReactiveStateStore:
    """
    Key-value state bound to one bus.

    Usage:
        store = ReactiveStateStore(bus)
        bus.subscribe("state.changed", render)
        store.set_state("count", 1)   # render({"key": "count", ...})
        store.get_state("count")      # 1
        store.get_state("missing")    # ABSENT
    """

    def __init__(self, bus: EventBus):
        self._bus = bus
        self._state: Dict[str, Any] = {}

    @property
    def bus(self) -> EventBus:
        return self._bus

    def get_state(self, key: Any = _ALL) -> Any:
        """
        With no key, a shallow copy of the whole map.
        With a key, its value, or ABSENT if it was never set.
        """
        if key is _ALL:
            return dict(self._state)
        return self._state.get(key, ABSENT)

    def has_state(self, key: str) -> bool:
        return key in self._state

    def set_state(self, key: str, value: Any) -> "ReactiveStateStore":
        previous = self._state.get(key, ABSENT)
        self._state[key] = value
        logger.debug(f"State '{key}' changed: {previous!r} → {value!r}")
        self._bus.publish(
            STATE_CHANGED,
            {"key": key, "value": value, "previous": previous},
        )
        return self

    def reset_state(self) -> "ReactiveStateStore":
        self._state = {}
        logger.debug("State reset")
        self._bus.publish(STATE_RESET, {})
        return self

    def __contains__(self, key: object) -> bool:
        return key in self._state

    def __len__(self) -> int:
        return len(self._state)
