"""
nsbus App - Application
========================
Root object: three components (controllers, views, models), each with
its own bus, plus a reactive state store publishing on the models bus.
"""

from __future__ import annotations

import logging
from typing import Optional

from nsbus import __version__
from nsbus.app.component import Component
from nsbus.config.settings import BusSettings
from nsbus.state.store import ReactiveStateStore

logger = logging.getLogger("nsbus.app")


class Application:
    """
    Usage:
        app = Application()
        app.views.add("counterView", CounterView)
        app.models.subscribe("state.changed", on_change)
        app.state.set_state("count", 1)
        app.destroy()
    """

    VERSION = __version__

    def __init__(self, settings: Optional[BusSettings] = None):
        self.controllers = Component(self, "controllers", settings)
        self.views = Component(self, "views", settings)
        self.models = Component(self, "models", settings)
        self.state = ReactiveStateStore(self.models.bus)

    def destroy(self) -> "Application":
        """
        Tear down all three buses, then reset state. The reset is
        published on the fresh models bus, so its log holds one
        "state.reset" entry afterwards.
        """
        self.controllers.destroy()
        self.views.destroy()
        self.models.destroy()
        self.state.reset_state()
        logger.debug("Application destroyed")
        return self
