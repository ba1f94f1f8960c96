"""
nsbus App - Element
====================
Base class for every model, view and controller registered in a
Component.

An element knows its own id and the component that owns it. Events it
publishes are scoped to itself: publish("saved") on element "userModel"
publishes "userModel.saved" on the component's bus.

Subclasses override setup() instead of __init__ and list in `commands`
the methods that Component.call() may invoke by name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, FrozenSet

if TYPE_CHECKING:
    import asyncio

    from nsbus.app.application import Application
    from nsbus.app.component import Component
    from nsbus.events.bus import PublishReceipt
    from nsbus.events.tree import Callback
    from nsbus.state.store import ReactiveStateStore


class Element:
    """
    Usage:
        class UserModel(Element):
            commands = frozenset({"login"})

            def setup(self, **options):
                self.users = options.get("users", {})

            def login(self, name):
                self.publish("login", {"name": name})

        app.models.add("userModel", UserModel, users={})
        app.models.call("userModel.login", "ada")
    """

    commands: FrozenSet[str] = frozenset()

    def __init__(self, element_id: str, component: "Component"):
        self._id = element_id
        self._component = component

    def setup(self, **options: Any) -> None:
        """Called once after the element is registered."""
        pass

    @property
    def id(self) -> str:
        return self._id

    @property
    def component(self) -> "Component":
        return self._component

    @property
    def app(self) -> "Application":
        return self._component.app

    @property
    def controllers(self) -> "Component":
        return self.app.controllers

    @property
    def views(self) -> "Component":
        return self.app.views

    @property
    def models(self) -> "Component":
        return self.app.models

    @property
    def state(self) -> "ReactiveStateStore":
        return self.app.state

    def scoped(self, context: str) -> str:
        return f"{self._id}.{context}"

    def publish(self, context: str, payload: Any = None) -> None:
        self._component.publish(self.scoped(context), payload)

    def publish_async(
        self, context: str, payload: Any = None
    ) -> "asyncio.Future[PublishReceipt]":
        return self._component.publish_async(self.scoped(context), payload)

    def subscribe(self, context: str, callback: "Callback") -> str:
        """Listen on this element's component bus, with self as scope."""
        return self._component.subscribe(context, callback, scope=self)

    def once(self, context: str, callback: "Callback") -> str:
        return self._component.once(context, callback, scope=self)

    def destroy(self) -> None:
        """Remove this element from its component."""
        self._component.remove(self._id)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._component.name}.{self._id}>"
