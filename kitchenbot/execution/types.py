"""Routine and action type definitions.

Actions are plain data: a tagged union discriminated on ``kind`` that the
:class:`~kitchenbot.control.dispatch.ActionDispatcher` applies to the
actuator façade. Keeping routines as data makes them serializable with
``model_dump()`` and testable without a simulator.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class ArmJoint(str, Enum):
    """The five arm joints, base rotation to wrist."""

    ARM1 = "arm1"
    ARM2 = "arm2"
    ARM3 = "arm3"
    ARM4 = "arm4"
    ARM5 = "arm5"


class BaseMotion(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    STRAFE_LEFT = "strafe_left"
    STRAFE_RIGHT = "strafe_right"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    RESET = "reset"


class GripperAction(str, Enum):
    GRIP = "grip"
    RELEASE = "release"


class RoutineId(str, Enum):
    """Named routines, in the order the supervisor runs them."""

    PICKUP = "pickup"
    MOVE_LEFT = "move_left"
    FEED = "feed"
    PUSH_FOOD = "push_food"
    DROP_FOOD = "drop_food"
    CLEAN_KITCHEN = "clean_kitchen"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class ArmTargets(BaseModel):
    """Joint position targets, applied in insertion order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["arm"] = "arm"
    positions: dict[ArmJoint, float]


class BaseCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["base"] = "base"
    motion: BaseMotion


class GripperCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["gripper"] = "gripper"
    command: GripperAction


class Speech(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["speech"] = "speech"
    text: str


Action = Annotated[
    ArmTargets | BaseCommand | GripperCommand | Speech,
    Field(discriminator="kind"),
]

# Application order within a step: arm, then gripper and base, then speech.
ACTION_PRIORITY: dict[str, int] = {
    "arm": 0,
    "gripper": 1,
    "base": 1,
    "speech": 2,
}


def ordered(actions: list[Action]) -> list[Action]:
    """Return ``actions`` in application order.

    Stable: actions of equal priority keep their listed order.
    """
    return sorted(actions, key=lambda a: ACTION_PRIORITY.get(a.kind, len(ACTION_PRIORITY)))


# ---------------------------------------------------------------------------
# Steps and routines
# ---------------------------------------------------------------------------


class Step(BaseModel):
    """Actions applied once on entry, then a minimum dwell before advancing.

    Attributes:
        actions: Actuator commands for this step.
        dwell_seconds: Simulated time to remain in the step.
    """

    model_config = ConfigDict(frozen=True)

    actions: list[Action] = Field(default_factory=list)
    dwell_seconds: float = Field(0.0, ge=0.0)


class Routine(BaseModel):
    """An ordered list of steps plus the actions applied on completion.

    Attributes:
        id: Routine identifier.
        steps: Timed steps, entered one per expired deadline.
        finish: Actions applied on the tick the routine completes.
    """

    model_config = ConfigDict(frozen=True)

    id: RoutineId
    steps: list[Step]
    finish: list[Action] = Field(default_factory=list)

    @property
    def total_dwell(self) -> float:
        return sum(s.dwell_seconds for s in self.steps)
