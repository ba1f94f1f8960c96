"""
nsbus Events - Errors
======================
Raised only for call-site programming errors (wrong argument types).
Runtime conditions such as an unknown token or a publish with no
listeners are reported through return values, never exceptions.
"""


class EventBusError(Exception):
    """Base error for event bus operations."""
    pass


class InvalidContextError(EventBusError):
    """Context is not a string."""

    def __init__(self, context: object):
        self.context = context
        super().__init__(
            f"Event context must be a string, got {type(context).__name__}."
        )


class InvalidCallbackError(EventBusError):
    """Subscription callback is not callable."""

    def __init__(self, context: str, callback: object):
        self.context = context
        self.callback = callback
        super().__init__(
            f"Callback for '{context}' must be callable, "
            f"got {type(callback).__name__}."
        )
