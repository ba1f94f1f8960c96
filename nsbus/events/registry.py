"""
nsbus Events - Subscription Registry
======================================
Owns the namespace tree and every subscription in it.

Rules:
- Tokens are unique for the lifetime of the registry
- Subscriptions on one node keep registration order
- Empty segments never create a node
- Removal by token searches the whole tree (tokens are unique)
- teardown() swaps in a fresh root, discarding everything at once
- Single-threaded: no locking. Callbacks may re-enter the registry
  from inside a dispatch, which the snapshot-based dispatch tolerates

An empty (or all-dots) context registers on the root node itself.
Such a subscription is never delivered because publish never matches
the root, but it can still be found and removed by its token.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from typing import Any, Iterator, Optional

from nsbus.events.errors import InvalidCallbackError, InvalidContextError
from nsbus.events.tree import Callback, Node, Subscription, split_context

logger = logging.getLogger("nsbus.events")


class SubscriptionRegistry:
    """
    Namespace tree plus the operations that add, find and remove
    subscriptions in it.

    Usage:
        registry = SubscriptionRegistry()
        token = registry.register("user.login", None, on_login)
        registry.find(token)        # Subscription
        registry.unregister(token)  # True
        registry.unregister(token)  # False
    """

    def __init__(self, token_prefix: str = "sub"):
        self._root = Node()
        self._token_prefix = token_prefix
        self._counter = itertools.count(1)
        self._generation = 0

    @property
    def root(self) -> Node:
        return self._root

    @property
    def generation(self) -> int:
        """Incremented by every teardown."""
        return self._generation

    def _next_token(self) -> str:
        # Uniqueness comes from the counter.
        return f"{self._token_prefix}_{next(self._counter)}_{uuid.uuid4().hex[:8]}"

    def register(
        self,
        context: str,
        scope: Any,
        callback: Callback,
        once: bool = False,
    ) -> str:
        """
        Register a callback on a context and return its token.

        Raises:
            InvalidContextError:  context is not a string
            InvalidCallbackError: callback is not callable
        """
        if not isinstance(context, str):
            raise InvalidContextError(context)
        if not callable(callback):
            raise InvalidCallbackError(context, callback)

        segments = split_context(context)

        node = self._root
        for segment in segments:
            node = node.ensure_child(segment)

        token = self._next_token()
        node.subscriptions.append(
            Subscription(
                token=token,
                context=context,
                scope=scope,
                callback=callback,
                once=once,
            )
        )

        if not segments:
            logger.warning(
                f"Subscription {token} registered with empty context "
                f"'{context}'; it will never be delivered."
            )
        else:
            logger.debug(
                f"Subscription registered: {token} → {context}"
                f"{' (once)' if once else ''}"
            )
        return token

    def _locate(self, token: str) -> Optional[tuple[Node, Subscription]]:
        stack = [self._root]
        while stack:
            node = stack.pop()
            for subscription in node.subscriptions:
                if subscription.token == token:
                    return node, subscription
            stack.extend(node.children.values())
        return None

    def find(self, token: str) -> Optional[Subscription]:
        """Look up a subscription by token without removing it."""
        found = self._locate(token)
        return found[1] if found else None

    def unregister(self, token: str) -> bool:
        """
        Remove the subscription carrying token.

        Returns False when no subscription has that token (unknown,
        already removed, or a consumed once-subscription).
        """
        found = self._locate(token)
        if found is None:
            logger.debug(f"Unsubscribe: token {token} not found")
            return False
        node, subscription = found
        node.discard(subscription)
        subscription.active = False
        logger.debug(f"Subscription removed: {token} ({subscription.context})")
        return True

    def consume(self, node: Node, subscription: Subscription) -> None:
        """Drop a once-subscription from the node it was delivered on."""
        subscription.active = False
        node.discard(subscription)

    def walk(self, context: str) -> Iterator[Node]:
        """
        Yield the nodes along the segment path of context, shallowest
        first, stopping at the first segment with no node.

        Children are looked up lazily, so nodes created by a callback
        while an earlier node is being dispatched are still reached.
        """
        node = self._root
        for segment in split_context(context):
            node = node.child(segment)
            if node is None:
                return
            yield node

    def teardown(self) -> None:
        """Discard the whole tree."""
        self._root = Node()
        self._generation += 1

    def __len__(self) -> int:
        return self._root.subscription_count()
