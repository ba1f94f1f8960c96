"""
nsbus App - Component
======================
A named registry of elements sharing one EventBus.

Rules:
- Element ids are non-empty and contain no '.'
- Adding an id twice logs a warning and returns the existing element
- Removing an unknown id logs a warning and does nothing
- call("elementId.method", arg) reaches only methods the element
  lists in its `commands`; anything else logs a warning, returns None
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional, Type

from nsbus.app.element import Element
from nsbus.config.settings import BusSettings
from nsbus.events.bus import EventBus

if TYPE_CHECKING:
    import asyncio

    from nsbus.app.application import Application
    from nsbus.events.bus import LogEntry, PublishReceipt
    from nsbus.events.tree import Callback

logger = logging.getLogger("nsbus.app")


class Component:
    """
    Holds elements by id and the bus they publish on.

    The publish/subscribe methods delegate to the bus so elements can
    write `self.models.subscribe("state.changed", self.render)`.
    """

    def __init__(
        self,
        app: "Application",
        name: str,
        settings: Optional[BusSettings] = None,
    ):
        self._app = app
        self._name = name
        self._bus = EventBus(settings)
        self._elements: Dict[str, Element] = {}

    @property
    def app(self) -> "Application":
        return self._app

    @property
    def name(self) -> str:
        return self._name

    @property
    def bus(self) -> EventBus:
        return self._bus

    # ── Elements ─────────────────────────────────────────────

    def add(
        self,
        element_id: str,
        element_cls: Type[Element] = Element,
        **options: Any,
    ) -> Element:
        """
        Build, register and set up an element.

        Raises:
            ValueError: element_id is empty or contains '.'
            TypeError:  element_cls is not an Element subclass
        """
        if not isinstance(element_id, str) or not element_id or "." in element_id:
            raise ValueError(
                f"Element id must be a non-empty string without '.', "
                f"got {element_id!r}."
            )
        if not (isinstance(element_cls, type) and issubclass(element_cls, Element)):
            raise TypeError(
                f"element_cls must be an Element subclass, got {element_cls!r}."
            )

        existing = self._elements.get(element_id)
        if existing is not None:
            logger.warning(
                f"{self._name}: element '{element_id}' already exists. "
                f"Returning existing instance."
            )
            return existing

        element = element_cls(element_id, self)
        self._elements[element_id] = element
        element.setup(**options)
        logger.debug(f"{self._name}: element '{element_id}' added")
        return element

    def has(self, element_id: str) -> bool:
        return element_id in self._elements

    def get(self, element_id: str) -> Optional[Element]:
        return self._elements.get(element_id)

    def remove(self, element_id: str) -> "Component":
        if element_id not in self._elements:
            logger.warning(
                f"{self._name}: element '{element_id}' not found. "
                f"Nothing to remove."
            )
            return self
        del self._elements[element_id]
        logger.debug(f"{self._name}: element '{element_id}' removed")
        return self

    def call(self, path: str, argument: Any = None) -> Any:
        """
        Invoke a command on an element: call("userCtrl.login", payload).

        Returns the command's return value, or None when the element or
        command does not exist.
        """
        element_id, _, command = path.partition(".")
        element = self._elements.get(element_id)
        if (
            element is None
            or command not in type(element).commands
            or not callable(getattr(element, command, None))
        ):
            logger.warning(
                f"{self._name}: call failed for '{path}'. "
                f"Check element id and command name."
            )
            return None
        return getattr(element, command)(argument)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._elements))

    def __len__(self) -> int:
        return len(self._elements)

    # ── Bus delegation ───────────────────────────────────────

    def publish(self, context: str, payload: Any = None) -> "Component":
        self._bus.publish(context, payload)
        return self

    def publish_async(
        self, context: str, payload: Any = None
    ) -> "asyncio.Future[PublishReceipt]":
        return self._bus.publish_async(context, payload)

    def subscribe(
        self, context: str, callback: "Callback", scope: Any = None
    ) -> str:
        return self._bus.subscribe(context, callback, scope)

    def once(self, context: str, callback: "Callback", scope: Any = None) -> str:
        return self._bus.once(context, callback, scope)

    def unsubscribe(self, token: str) -> bool:
        return self._bus.unsubscribe(token)

    def get_log(self) -> "list[LogEntry]":
        return self._bus.get_log()

    def clear_log(self) -> "Component":
        self._bus.clear_log()
        return self

    def destroy(self) -> "Component":
        """Wipe the bus (subscriptions and log). Elements stay registered."""
        self._bus.destroy()
        return self
