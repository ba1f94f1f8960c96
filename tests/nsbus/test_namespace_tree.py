"""
Tests for nsbus.events.tree - segment parsing and nodes.
"""

import pytest

from nsbus.events.tree import Node, Subscription, split_context


def _sub(token="t1", context="a"):
    return Subscription(token=token, context=context, scope=None, callback=lambda e: None)


class TestSplitContext:
    @pytest.mark.parametrize(
        "context, expected",
        [
            ("a", ["a"]),
            ("a.b.c", ["a", "b", "c"]),
            (".a.b", ["a", "b"]),
            ("a.b.", ["a", "b"]),
            ("a..b", ["a", "b"]),
            ("", []),
            ("...", []),
        ],
    )
    def test_segments(self, context, expected):
        assert split_context(context) == expected


class TestNode:
    def test_ensure_child_creates_once(self):
        root = Node()
        first = root.ensure_child("a")
        second = root.ensure_child("a")
        assert first is second
        assert root.child("a") is first
        assert root.child("b") is None

    def test_discard_by_identity(self):
        node = Node()
        s1, s2 = _sub("t1"), _sub("t2")
        node.subscriptions.extend([s1, s2])
        assert node.discard(s1) is True
        assert node.subscriptions == [s2]
        assert node.discard(s1) is False

    def test_subscription_count_is_recursive(self):
        root = Node()
        root.ensure_child("a").subscriptions.append(_sub("t1"))
        root.ensure_child("a").ensure_child("b").subscriptions.append(_sub("t2"))
        root.ensure_child("c")
        assert root.subscription_count() == 2

    def test_subscription_delivers_payload(self):
        received = []
        sub = Subscription(token="t", context="a", scope=None, callback=received.append)
        sub.deliver({"n": 1})
        assert received == [{"n": 1}]

    def test_scope_is_recorded_not_bound(self):
        owner = object()
        received = []
        sub = Subscription(
            token="t", context="a", scope=owner, callback=lambda *args: received.append(args)
        )
        sub.deliver({"n": 1})
        assert sub.scope is owner
        assert received == [({"n": 1},)]
