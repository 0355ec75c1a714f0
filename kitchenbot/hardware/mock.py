"""Deterministic fake host for simulator-free testing.

:class:`MockHost` satisfies :class:`~kitchenbot.hardware.host.HostRuntime`.
Simulated time is ``step_count * time_step`` so every run is reproducible,
keyboard input is scripted by tick index, and every actuator command is
recorded with the simulated time it was issued at.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from kitchenbot.errors import UnknownDeviceError
from kitchenbot.hardware.host import StepResult

logger = logging.getLogger(__name__)

MOCK_DEVICE_NAMES: list[str] = [
    "arm1",
    "arm2",
    "arm3",
    "arm4",
    "arm5",
    "wheel1",
    "wheel2",
    "wheel3",
    "wheel4",
    "finger::left",
    "speaker",
]


@dataclass(frozen=True)
class MockDevice:
    """Device stub identified by name."""

    name: str


@dataclass(frozen=True)
class Command:
    """One recorded host call that targets a device.

    Attributes:
        time: Simulated time the command was issued at.
        device: Device name.
        kind: One of "position", "velocity", "language", "engine", "speak".
        value: Commanded value (radians, rad/s, or text).
    """

    time: float
    device: str
    kind: str
    value: Any


@dataclass
class MockHost:
    """Fake simulator that advances time only when :meth:`step` is called.

    Attributes:
        time_step_ms: Fixed step in milliseconds.
        keys: Key code to report from :meth:`poll_key`, by step count.
        terminate_at: Step call number (1-indexed) that returns TERMINATE.
        missing: Device names that fail to resolve.
        speech_fails: If True, :meth:`speak` raises like a broken TTS backend.
        speech_seconds: How long :meth:`is_speaking` stays True after an utterance.
    """

    time_step_ms: int = 32
    keys: dict[int, int] = field(default_factory=dict)
    terminate_at: int | None = None
    missing: set[str] = field(default_factory=set)
    speech_fails: bool = False
    speech_seconds: float = 1.0

    step_count: int = field(default=0, init=False)
    init_calls: int = field(default=0, init=False)
    cleanup_calls: int = field(default=0, init=False)
    keyboard_period: int | None = field(default=None, init=False)
    commands: list[Command] = field(default_factory=list, init=False)
    resolved: list[str] = field(default_factory=list, init=False)
    _speaking_until: float = field(default=-1.0, init=False)
    _closed: bool = field(default=False, init=False)

    # -- runtime ------------------------------------------------------------

    def init(self) -> None:
        self.init_calls += 1

    def step(self) -> StepResult:
        self.step_count += 1
        if self.terminate_at is not None and self.step_count >= self.terminate_at:
            return StepResult.TERMINATE
        return StepResult.CONTINUE

    def now(self) -> float:
        # Multiply instead of accumulating so deadlines compare exactly.
        return self.step_count * self.time_step_ms / 1000.0

    def resolve_device(self, name: str) -> MockDevice:
        if name in self.missing or name not in MOCK_DEVICE_NAMES:
            raise UnknownDeviceError(name)
        self.resolved.append(name)
        return MockDevice(name)

    def cleanup(self) -> None:
        self.cleanup_calls += 1
        if not self._closed:
            self._closed = True
            logger.info("MockHost closed after %d steps", self.step_count)

    def advance_to(self, seconds: float) -> None:
        """Step until simulated time reaches ``seconds`` (never backwards)."""
        while self.now() < seconds:
            self.step()

    # -- keyboard -----------------------------------------------------------

    def enable_keyboard(self, period_ms: int) -> None:
        self.keyboard_period = period_ms

    def poll_key(self) -> int | None:
        if self.keyboard_period is None:
            return None
        return self.keys.get(self.step_count)

    # -- motors and speaker -------------------------------------------------

    def set_position(self, handle: MockDevice, radians: float) -> None:
        self._record(handle, "position", radians)

    def set_velocity(self, handle: MockDevice, rad_per_s: float) -> None:
        self._record(handle, "velocity", rad_per_s)

    def set_language(self, handle: MockDevice, language: str) -> None:
        self._record(handle, "language", language)

    def set_engine(self, handle: MockDevice, engine: str) -> None:
        self._record(handle, "engine", engine)

    def speak(self, handle: MockDevice, text: str, volume: float) -> None:
        if self.speech_fails:
            raise RuntimeError("speech backend unavailable")
        self._record(handle, "speak", text)
        self._speaking_until = self.now() + self.speech_seconds

    def is_speaking(self, handle: MockDevice) -> bool:
        return self.now() < self._speaking_until

    # -- inspection ---------------------------------------------------------

    def commands_for(self, device: str, kind: str | None = None) -> list[Command]:
        """Recorded commands for one device, optionally of one kind."""
        return [
            c for c in self.commands if c.device == device and (kind is None or c.kind == kind)
        ]

    def commands_after(self, seconds: float) -> list[Command]:
        """Commands issued strictly after ``seconds``."""
        return [c for c in self.commands if c.time > seconds]

    def last_value(self, device: str, kind: str) -> Any:
        """Latest commanded value for a device, or None."""
        matching = self.commands_for(device, kind)
        return matching[-1].value if matching else None

    def wheel_velocities(self) -> list[float | None]:
        """Latched velocity of each wheel in wheel order."""
        return [self.last_value(f"wheel{i}", "velocity") for i in range(1, 5)]

    def _record(self, handle: MockDevice, kind: str, value: Any) -> None:
        self.commands.append(Command(time=self.now(), device=handle.name, kind=kind, value=value))
