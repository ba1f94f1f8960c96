"""
nsbus Events - Namespace Tree
==============================
Trie of dot-separated context segments.

Each Node holds its children (keyed by segment) and the ordered list
of Subscriptions registered on exactly that path. The root Node is the
empty prefix; it is never matched by a publish.

Nodes are created on first registration through them and are never
pruned, even when their subscription list becomes empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

Callback = Callable[[Any], Any]


def split_context(context: str) -> List[str]:
    """
    Split a context into its non-empty segments.

    Leading, trailing and repeated dots collapse:
        split_context("a..b.")  -> ["a", "b"]
        split_context("...")    -> []
    """
    return [segment for segment in context.split(".") if segment]


@dataclass(eq=False)
class Subscription:
    """
    One registered callback, owned by the Node it was appended to.

    scope is informational only: it records the object that owns the
    subscription (an Element, for instance) and is never bound to the
    callback. A bound method already carries its receiver.
    """

    token: str
    context: str
    scope: Any
    callback: Callback
    once: bool = False
    active: bool = True

    def deliver(self, payload: Any) -> None:
        self.callback(payload)


@dataclass(eq=False)
class Node:
    """A single segment position in the namespace tree."""

    children: Dict[str, "Node"] = field(default_factory=dict)
    subscriptions: List[Subscription] = field(default_factory=list)

    def child(self, segment: str) -> Optional["Node"]:
        return self.children.get(segment)

    def ensure_child(self, segment: str) -> "Node":
        node = self.children.get(segment)
        if node is None:
            node = Node()
            self.children[segment] = node
        return node

    def discard(self, subscription: Subscription) -> bool:
        """Remove a subscription by identity. Returns True if it was present."""
        for index in range(len(self.subscriptions) - 1, -1, -1):
            if self.subscriptions[index] is subscription:
                del self.subscriptions[index]
                return True
        return False

    def subscription_count(self) -> int:
        """Subscriptions held by this node and every node below it."""
        return len(self.subscriptions) + sum(
            child.subscription_count() for child in self.children.values()
        )
