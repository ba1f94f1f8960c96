"""
nsbus Events - Public API
==========================
Namespaced publish/subscribe with prefix bubbling.
"""

from nsbus.events.bus import EventBus, LogEntry, PublishReceipt
from nsbus.events.errors import (
    EventBusError,
    InvalidCallbackError,
    InvalidContextError,
)
from nsbus.events.registry import SubscriptionRegistry
from nsbus.events.tree import Node, Subscription, split_context

__all__ = [
    "EventBus",
    "LogEntry",
    "PublishReceipt",
    "SubscriptionRegistry",
    "Node",
    "Subscription",
    "split_context",
    "EventBusError",
    "InvalidContextError",
    "InvalidCallbackError",
]
