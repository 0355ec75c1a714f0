"""Host runtime interface.

The simulator owns time, devices, and the fixed-step tick. Everything above
this layer talks to it through :class:`HostRuntime`, so the controller runs
unchanged against the real simulator (:mod:`kitchenbot.hardware.webots`) or
the deterministic fake (:mod:`kitchenbot.hardware.mock`).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

# Device handles are whatever the host hands back; callers never inspect them.
Handle = Any


class StepResult(str, Enum):
    """Outcome of advancing the simulator by one fixed step."""

    CONTINUE = "continue"
    TERMINATE = "terminate"


class HostRuntime(Protocol):
    """Operations every host adapter provides."""

    def init(self) -> None:
        """Initialize the simulator link. Must be the first call."""
        ...

    def step(self) -> StepResult:
        """Advance simulated time by exactly one fixed step."""
        ...

    def now(self) -> float:
        """Current simulated time in seconds."""
        ...

    def resolve_device(self, name: str) -> Handle:
        """Return the handle for ``name``.

        Raises:
            UnknownDeviceError: If the host has no device with that name.
        """
        ...

    def cleanup(self) -> None:
        """Release simulator resources. Safe to call more than once."""
        ...

    def enable_keyboard(self, period_ms: int) -> None: ...

    def poll_key(self) -> int | None: ...

    def set_position(self, handle: Handle, radians: float) -> None: ...

    def set_velocity(self, handle: Handle, rad_per_s: float) -> None: ...

    def set_language(self, handle: Handle, language: str) -> None: ...

    def set_engine(self, handle: Handle, engine: str) -> None: ...

    def speak(self, handle: Handle, text: str, volume: float) -> None: ...

    def is_speaking(self, handle: Handle) -> bool: ...
