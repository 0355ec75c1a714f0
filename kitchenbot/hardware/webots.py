"""Webots host adapter.

Wraps the simulator's Python ``controller`` module. That module is shipped
with Webots and put on the path when Webots launches a controller, so it is
imported in :meth:`WebotsHost.init` rather than at module import time.
"""

from __future__ import annotations

import logging
from typing import Any

from kitchenbot.errors import UnknownDeviceError
from kitchenbot.hardware.host import Handle, StepResult

logger = logging.getLogger(__name__)


class WebotsHost:
    """:class:`~kitchenbot.hardware.host.HostRuntime` backed by a Webots ``Robot``.

    Args:
        time_step_ms: Fixed step passed to every ``Robot.step()`` call.
    """

    def __init__(self, time_step_ms: int) -> None:
        self._time_step_ms = time_step_ms
        self._robot: Any = None
        self._keyboard: Any = None

    def init(self) -> None:
        from controller import Robot

        self._robot = Robot()
        logger.info("Connected to simulator (step=%dms)", self._time_step_ms)

    def step(self) -> StepResult:
        if self._robot.step(self._time_step_ms) == -1:
            return StepResult.TERMINATE
        return StepResult.CONTINUE

    def now(self) -> float:
        return self._robot.getTime()

    def resolve_device(self, name: str) -> Handle:
        device = self._robot.getDevice(name)
        if device is None:
            raise UnknownDeviceError(name)
        logger.debug("Resolved device %s", name)
        return device

    def cleanup(self) -> None:
        if self._robot is None:
            return
        self._keyboard = None
        self._robot = None
        logger.info("Simulator link released")

    # -- keyboard -----------------------------------------------------------

    def enable_keyboard(self, period_ms: int) -> None:
        self._keyboard = self._robot.getKeyboard()
        self._keyboard.enable(period_ms)

    def poll_key(self) -> int | None:
        # Webots reports "no key" as -1
        key = self._keyboard.getKey()
        return key if key > 0 else None

    # -- motors -------------------------------------------------------------

    def set_position(self, handle: Handle, radians: float) -> None:
        handle.setPosition(radians)

    def set_velocity(self, handle: Handle, rad_per_s: float) -> None:
        handle.setVelocity(rad_per_s)

    # -- speaker ------------------------------------------------------------

    def set_language(self, handle: Handle, language: str) -> None:
        handle.setLanguage(language)

    def set_engine(self, handle: Handle, engine: str) -> None:
        handle.setEngine(engine)

    def speak(self, handle: Handle, text: str, volume: float) -> None:
        handle.speak(text, volume)

    def is_speaking(self, handle: Handle) -> bool:
        return bool(handle.isSpeaking())
