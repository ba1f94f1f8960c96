"""
nsbus Events - Event Bus
=========================
Hierarchical publish/subscribe over the namespace tree.

Dispatch behavior for publish("a.b.c", payload):
1. Append a LogEntry (time, context, payload)
2. Walk the tree segment by segment: "a", then "a.b", then "a.b.c"
3. Stop at the first segment with no node
4. At each node reached, deliver to its subscriptions in
   registration order before descending further
5. Drop once-subscriptions delivered at that node
6. Catch, log and continue past a failing callback
   (unless BusSettings.propagate_errors is set)

So a subscriber on "a" hears every event published under "a.*",
before any subscriber on "a.b" does. A subscriber on "a.b.q" does not
make "a.b.c" reachable, but it does create the "a" and "a.b" nodes.

Delivery at a node runs over a snapshot of its subscription list:
subscriptions added there by a callback wait for the next publish,
subscriptions removed by a callback are skipped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from nsbus.config.settings import DEFAULT_SETTINGS, BusSettings
from nsbus.events.errors import InvalidContextError
from nsbus.events.registry import SubscriptionRegistry
from nsbus.events.tree import Callback, Node, Subscription

logger = logging.getLogger("nsbus.events")


# ══════════════════════════════════════════════════════════════
# RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LogEntry:
    """One publish call. The payload is referenced, not copied."""

    time: datetime
    context: str
    payload: Any


@dataclass(frozen=True)
class PublishReceipt:
    """Result of an awaited publish_async()."""

    context: str
    payload: Any


# ══════════════════════════════════════════════════════════════
# EVENT BUS
# ══════════════════════════════════════════════════════════════

class EventBus:
    """
    In-process namespaced event bus.

    Usage:
        bus = EventBus()
        token = bus.subscribe("user", on_any_user_event)
        bus.subscribe("user.login", on_login)

        bus.publish("user.login.failed", {"name": "ada"})
        # on_any_user_event, then on_login

        bus.unsubscribe(token)  # True

    Errors from the bus itself are limited to argument type checks;
    an unmatched publish or an unknown token is not an error.
    """

    def __init__(self, settings: Optional[BusSettings] = None):
        self._settings = settings or DEFAULT_SETTINGS
        self._registry = SubscriptionRegistry(
            token_prefix=self._settings.token_prefix
        )
        self._log: List[LogEntry] = []

    @property
    def settings(self) -> BusSettings:
        return self._settings

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    @property
    def subscription_count(self) -> int:
        return len(self._registry)

    # ── Subscription ─────────────────────────────────────────

    def subscribe(
        self, context: str, callback: Callback, scope: Any = None
    ) -> str:
        """Deliver every event published on or under context."""
        return self._registry.register(context, scope, callback, once=False)

    def once(self, context: str, callback: Callback, scope: Any = None) -> str:
        """Like subscribe(), but removed right after its first delivery."""
        return self._registry.register(context, scope, callback, once=True)

    def unsubscribe(self, token: str) -> bool:
        """Remove a subscription. Returns False if the token is unknown."""
        return self._registry.unregister(token)

    # ── Publishing ───────────────────────────────────────────

    def publish(self, context: str, payload: Any = None) -> "EventBus":
        """
        Deliver payload to subscribers on every prefix of context,
        least specific first. Returns the bus for chaining.

        Raises:
            InvalidContextError: context is not a string
            Any callback exception, only when propagate_errors is set
        """
        if not isinstance(context, str):
            raise InvalidContextError(context)
        if payload is None:
            payload = {}

        self._log.append(
            LogEntry(
                time=self._settings.clock.now_utc(),
                context=context,
                payload=payload,
            )
        )

        generation = self._registry.generation
        reached = 0
        for node in self._registry.walk(context):
            if self._registry.generation != generation:
                # Torn down by a callback; the rest of the old tree is gone.
                break
            reached += 1
            self._dispatch_node(node, context, payload, generation)

        if not reached:
            logger.debug(f"No subscribers matched '{context}'")
        return self

    def _dispatch_node(
        self, node: Node, context: str, payload: Any, generation: int
    ) -> None:
        consumed: List[Subscription] = []
        try:
            for subscription in list(node.subscriptions):
                if self._registry.generation != generation:
                    break
                if not subscription.active:
                    continue
                if subscription.once:
                    # Consumed before delivery so a re-entrant publish
                    # cannot deliver it a second time.
                    subscription.active = False
                    consumed.append(subscription)
                self._invoke(subscription, context, payload)
        finally:
            for subscription in consumed:
                self._registry.consume(node, subscription)

    def _invoke(self, subscription: Subscription, context: str, payload: Any) -> None:
        try:
            subscription.deliver(payload)
        except Exception as exc:
            if self._settings.propagate_errors:
                raise
            handler_name = getattr(
                subscription.callback, "__qualname__", repr(subscription.callback)
            )
            logger.error(
                f"Subscriber failed: {handler_name} on '{subscription.context}' "
                f"for '{context}' (token: {subscription.token}): {exc}",
                exc_info=True,
            )

    def publish_async(
        self, context: str, payload: Any = None
    ) -> "asyncio.Future[PublishReceipt]":
        """
        Schedule publish() on the next turn of the running event loop.

        Returns a future resolved with a PublishReceipt once every
        matching callback has run. Calls made from the same task run in
        the order they were scheduled. Awaiting is optional; the publish
        happens either way. Must be called with a running event loop.
        """
        if not isinstance(context, str):
            raise InvalidContextError(context)
        if payload is None:
            payload = {}

        loop = asyncio.get_running_loop()
        future: asyncio.Future[PublishReceipt] = loop.create_future()
        loop.call_soon(self._deferred_publish, future, context, payload)
        return future

    def _deferred_publish(
        self, future: "asyncio.Future[PublishReceipt]", context: str, payload: Any
    ) -> None:
        try:
            self.publish(context, payload)
        except Exception as exc:
            if not future.done():
                future.set_exception(exc)
            return
        if not future.done():
            future.set_result(PublishReceipt(context=context, payload=payload))

    # ── Log ──────────────────────────────────────────────────

    def get_log(self) -> List[LogEntry]:
        """Independent copy of the publish log."""
        return list(self._log)

    def clear_log(self) -> "EventBus":
        self._log = []
        return self

    # ── Teardown ─────────────────────────────────────────────

    def destroy(self) -> "EventBus":
        """Drop every subscription and the log. Safe to call repeatedly."""
        self._registry.teardown()
        self._log = []
        logger.debug("Event bus destroyed")
        return self
