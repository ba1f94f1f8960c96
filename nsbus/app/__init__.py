"""
nsbus App - Public API
=======================
Element / Component / Application composition over the event bus.
"""

from nsbus.app.application import Application
from nsbus.app.component import Component
from nsbus.app.element import Element

__all__ = [
    "Application",
    "Component",
    "Element",
]
