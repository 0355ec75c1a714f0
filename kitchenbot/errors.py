"""Exception taxonomy for the kitchen controller."""

from __future__ import annotations


class KitchenBotError(Exception):
    """Base class for all controller errors."""


class UnknownDeviceError(KitchenBotError, LookupError):
    """A device name could not be resolved by the host at startup."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown device: {name!r}")
        self.name = name


class HostTerminate(KitchenBotError):
    """The simulator requested shutdown from ``step()``."""


class InvalidRoutineError(KitchenBotError, ValueError):
    """A routine id has no registered step list."""


class InvalidActionError(KitchenBotError):
    """No handler is registered for an action kind."""
