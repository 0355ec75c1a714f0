"""Action dispatcher.

Maps each action kind to a handler that drives the actuator façade, and
applies a step's actions in priority order (arm, then gripper and base,
then speech).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from kitchenbot.control.actuators import Actuators
from kitchenbot.errors import InvalidActionError
from kitchenbot.execution.types import (
    Action,
    ArmTargets,
    BaseCommand,
    GripperAction,
    GripperCommand,
    Speech,
    ordered,
)

logger = logging.getLogger(__name__)

ActionHandler = Callable[[Actuators, Any], None]


def apply_arm(actuators: Actuators, action: ArmTargets) -> None:
    for joint, radians in action.positions.items():
        actuators.arm.set_joint_position(joint, radians)


def apply_base(actuators: Actuators, action: BaseCommand) -> None:
    actuators.base.move(action.motion)


def apply_gripper(actuators: Actuators, action: GripperCommand) -> None:
    if action.command is GripperAction.GRIP:
        actuators.gripper.grip()
    else:
        actuators.gripper.release()


def apply_speech(actuators: Actuators, action: Speech) -> None:
    actuators.speaker.speak(action.text)


class ActionDispatcher:
    """Registry of action handlers keyed by action kind.

    Args:
        actuators: Façade every handler drives.
    """

    def __init__(self, actuators: Actuators) -> None:
        self._actuators = actuators
        self._handlers: dict[str, ActionHandler] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self.register("arm", apply_arm)
        self.register("base", apply_base)
        self.register("gripper", apply_gripper)
        self.register("speech", apply_speech)

    def register(self, kind: str, fn: ActionHandler) -> None:
        """Register a handler for an action kind.

        Args:
            kind: Action discriminator (e.g., "arm").
            fn: Callable taking the façade and the action.
        """
        self._handlers[kind] = fn
        logger.debug("Registered action handler: %s", kind)

    def apply(self, action: Action) -> None:
        """Apply one action.

        Raises:
            InvalidActionError: If no handler is registered for ``action.kind``.
        """
        fn = self._handlers.get(action.kind)
        if fn is None:
            raise InvalidActionError(f"No handler for action kind: {action.kind}")
        logger.debug("Applying %s action: %s", action.kind, action)
        fn(self._actuators, action)

    def apply_all(self, actions: Iterable[Action]) -> None:
        """Apply a step's actions in priority order."""
        for action in ordered(list(actions)):
            self.apply(action)

    @property
    def kinds(self) -> list[str]:
        """Registered action kinds."""
        return list(self._handlers.keys())
