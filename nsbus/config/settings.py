"""
nsbus Config - Bus Settings
============================
Per-bus configuration. There is no environment or file based
configuration: settings are built in code and handed to EventBus.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from nsbus.time.clock import Clock, SystemClock


@dataclass(frozen=True)
class BusSettings:
    """
    Behaviour switches for one EventBus instance.

    token_prefix:     prefix of generated subscription tokens
    propagate_errors: re-raise callback exceptions instead of
                      logging them and continuing dispatch
    clock:            time source for log timestamps
    """

    token_prefix: str = "sub"
    propagate_errors: bool = False
    clock: Clock = field(default_factory=SystemClock)

    def __post_init__(self) -> None:
        if not isinstance(self.token_prefix, str) or not self.token_prefix:
            raise ValueError("token_prefix must be a non-empty string.")
        if "." in self.token_prefix:
            raise ValueError(
                f"token_prefix must not contain '.', got '{self.token_prefix}'."
            )
        if not callable(getattr(self.clock, "now_utc", None)):
            raise ValueError("clock must provide a now_utc() method.")


DEFAULT_SETTINGS = BusSettings()
