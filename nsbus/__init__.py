"""
nsbus
======
In-process hierarchical publish/subscribe bus with a reactive
key-value state store.
"""

__version__ = "1.0.0"

from nsbus.config.settings import BusSettings
from nsbus.events import (
    EventBus,
    EventBusError,
    InvalidCallbackError,
    InvalidContextError,
    LogEntry,
    PublishReceipt,
    SubscriptionRegistry,
)
from nsbus.state import ABSENT, ReactiveStateStore
from nsbus.app import Application, Component, Element

__all__ = [
    "__version__",
    "BusSettings",
    "EventBus",
    "LogEntry",
    "PublishReceipt",
    "SubscriptionRegistry",
    "EventBusError",
    "InvalidContextError",
    "InvalidCallbackError",
    "ABSENT",
    "ReactiveStateStore",
    "Application",
    "Component",
    "Element",
]
