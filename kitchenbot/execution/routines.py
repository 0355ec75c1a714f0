"""The six kitchen routines as static step lists."""

from __future__ import annotations

import math

from kitchenbot.execution.types import (
    ArmJoint,
    ArmTargets,
    BaseCommand,
    BaseMotion,
    GripperAction,
    GripperCommand,
    Routine,
    RoutineId,
    Speech,
    Step,
)

_J = ArmJoint

PICKUP = Routine(
    id=RoutineId.PICKUP,
    steps=[
        Step(
            actions=[
                Speech(text="Time for your vegetables!"),
                GripperCommand(command=GripperAction.RELEASE),
                ArmTargets(positions={_J.ARM1: 0.0, _J.ARM2: 0.0, _J.ARM3: -0.77, _J.ARM4: -1.21}),
            ],
            dwell_seconds=1.2,
        ),
        Step(actions=[GripperCommand(command=GripperAction.GRIP)], dwell_seconds=1.0),
        Step(actions=[ArmTargets(positions={_J.ARM2: math.pi / 2})], dwell_seconds=1.0),
    ],
)

MOVE_LEFT = Routine(
    id=RoutineId.MOVE_LEFT,
    steps=[
        Step(
            actions=[
                Speech(text="Here comes the nomm nomm train!"),
                BaseCommand(motion=BaseMotion.STRAFE_LEFT),
            ],
            dwell_seconds=3.0,
        ),
    ],
    finish=[BaseCommand(motion=BaseMotion.RESET)],
)

FEED = Routine(
    id=RoutineId.FEED,
    steps=[
        Step(
            actions=[
                Speech(text="Open up!"),
                ArmTargets(
                    positions={_J.ARM2: math.pi * 0.2, _J.ARM3: -math.pi / 2, _J.ARM4: -math.pi / 8}
                ),
            ],
            dwell_seconds=3.0,
        ),
    ],
)

PUSH_FOOD = Routine(
    id=RoutineId.PUSH_FOOD,
    steps=[
        Step(
            actions=[
                Speech(text="FINE!... have it your way."),
                BaseCommand(motion=BaseMotion.FORWARD),
            ],
            dwell_seconds=1.0,
        ),
    ],
    finish=[BaseCommand(motion=BaseMotion.RESET)],
)

DROP_FOOD = Routine(
    id=RoutineId.DROP_FOOD,
    steps=[
        Step(
            actions=[
                ArmTargets(
                    positions={
                        _J.ARM1: -0.09,
                        _J.ARM2: -0.5,
                        _J.ARM3: -math.pi / 2 + 0.5,
                        _J.ARM4: 0.0,
                    }
                ),
            ],
            dwell_seconds=3.0,
        ),
        Step(
            actions=[Speech(text="Jerk."), GripperCommand(command=GripperAction.RELEASE)],
            dwell_seconds=1.0,
        ),
    ],
)

CLEAN_KITCHEN = Routine(
    id=RoutineId.CLEAN_KITCHEN,
    steps=[
        Step(
            actions=[
                # crouch
                ArmTargets(positions={_J.ARM2: 1.57, _J.ARM3: -2.635, _J.ARM4: 1.78}),
                Speech(text="Now get out of my kitchen you filthy animal."),
                BaseCommand(motion=BaseMotion.FORWARD),
            ],
            dwell_seconds=6.0,
        ),
        Step(
            actions=[BaseCommand(motion=BaseMotion.RESET), Speech(text="BODY SLAM COMING UP.")],
            dwell_seconds=2.0,
        ),
        Step(actions=[BaseCommand(motion=BaseMotion.FORWARD)], dwell_seconds=4.0),
    ],
    finish=[Speech(text="OUCH. I HAVE FALLEN AND CAN'T GET UP.")],
)

ROUTINES: dict[RoutineId, Routine] = {
    r.id: r for r in (PICKUP, MOVE_LEFT, FEED, PUSH_FOOD, DROP_FOOD, CLEAN_KITCHEN)
}

# Order the supervisor runs routines in after the first key press.
CANONICAL_ORDER: list[RoutineId] = [
    RoutineId.PICKUP,
    RoutineId.MOVE_LEFT,
    RoutineId.FEED,
    RoutineId.PUSH_FOOD,
    RoutineId.DROP_FOOD,
    RoutineId.CLEAN_KITCHEN,
]
