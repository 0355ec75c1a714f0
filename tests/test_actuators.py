"""Unit tests for the actuator façade and the action dispatcher."""

from __future__ import annotations

import logging
import sys
from types import SimpleNamespace

import pytest

from kitchenbot.config import ControllerConfig
from kitchenbot.control.actuators import WHEEL_PATTERNS, Actuators
from kitchenbot.control.dispatch import ActionDispatcher
from kitchenbot.errors import InvalidActionError
from kitchenbot.execution.routines import PICKUP
from kitchenbot.execution.types import (
    ArmJoint,
    ArmTargets,
    BaseCommand,
    BaseMotion,
    GripperAction,
    GripperCommand,
    Speech,
)
from kitchenbot.hardware.mock import MockHost

# ------------------------------------------------------------------
# Base
# ------------------------------------------------------------------


@pytest.mark.parametrize(
    ("method", "expected"),
    [
        ("forward", [4.0, 4.0, 4.0, 4.0]),
        ("backward", [-4.0, -4.0, -4.0, -4.0]),
        ("strafe_left", [4.0, -4.0, -4.0, 4.0]),
        ("strafe_right", [-4.0, 4.0, 4.0, -4.0]),
        ("turn_left", [4.0, -4.0, 4.0, -4.0]),
        ("turn_right", [-4.0, 4.0, -4.0, 4.0]),
    ],
)
def test_base_wheel_speeds(
    host: MockHost, actuators: Actuators, method: str, expected: list[float]
) -> None:
    getattr(actuators.base, method)()
    assert host.wheel_velocities() == expected

    actuators.base.reset()
    assert host.wheel_velocities() == [0.0, 0.0, 0.0, 0.0]


def test_every_motion_has_a_pattern() -> None:
    assert set(WHEEL_PATTERNS) == set(BaseMotion)


def test_base_speed_from_config() -> None:
    host = MockHost()
    actuators = Actuators.resolve(host, ControllerConfig(base_speed=2.5))
    actuators.base.forward()
    assert host.wheel_velocities() == [2.5, 2.5, 2.5, 2.5]


# ------------------------------------------------------------------
# Arm and gripper
# ------------------------------------------------------------------


def test_arm_commands_target_named_joint(host: MockHost, actuators: Actuators) -> None:
    actuators.arm.set_joint_position(ArmJoint.ARM3, -0.77)
    actuators.arm.set_joint_velocity(ArmJoint.ARM5, 1.5)

    assert host.commands_for("arm3") == host.commands_for("arm3", "position")
    assert host.last_value("arm3", "position") == -0.77
    assert host.last_value("arm5", "velocity") == 1.5
    assert host.commands_for("arm1") == []


def test_gripper_grip_and_release(host: MockHost, actuators: Actuators) -> None:
    actuators.gripper.release()
    assert host.last_value("finger::left", "position") == 0.025
    actuators.gripper.grip()
    assert host.last_value("finger::left", "position") == 0.0


# ------------------------------------------------------------------
# Speaker
# ------------------------------------------------------------------


def test_speak_wraps_payload(host: MockHost, actuators: Actuators) -> None:
    actuators.speaker.speak("Open up!")

    assert host.last_value("speaker", "speak") == (
        '<prosody rate="0.75"><prosody pitch="-10st">Open up!</prosody></prosody>'
    )
    assert actuators.speaker.is_speaking()

    host.advance_to(host.now() + 2.0)
    assert not actuators.speaker.is_speaking()


def test_speak_failure_is_logged_not_raised(
    caplog: pytest.LogCaptureFixture, config: ControllerConfig
) -> None:
    host = MockHost(speech_fails=True)
    actuators = Actuators.resolve(host, config)

    with caplog.at_level(logging.WARNING, logger="kitchenbot.control.actuators"):
        actuators.speaker.speak("Jerk.")

    assert host.commands_for("speaker") == []
    assert "Speech backend failed" in caplog.text


def test_engine_selected_only_on_windows(
    monkeypatch: pytest.MonkeyPatch, config: ControllerConfig
) -> None:
    host = MockHost()
    actuators = Actuators.resolve(host, config)
    monkeypatch.setattr(sys, "platform", "linux")
    actuators.speaker.configure()
    assert host.commands_for("speaker", "engine") == []

    monkeypatch.setattr(sys, "platform", "win32")
    actuators.speaker.configure()
    assert host.last_value("speaker", "engine") == "microsoft"
    assert host.last_value("speaker", "language") == "en-US"


def test_safe_stop_zeroes_base_and_arm(host: MockHost, actuators: Actuators) -> None:
    actuators.base.forward()
    actuators.safe_stop()

    assert host.wheel_velocities() == [0.0, 0.0, 0.0, 0.0]
    assert [host.last_value(j.value, "velocity") for j in ArmJoint] == [0.0] * 5


# ------------------------------------------------------------------
# Dispatcher
# ------------------------------------------------------------------


def test_dispatch_order_arm_then_gripper_then_speech(
    host: MockHost, actuators: Actuators
) -> None:
    """PICKUP's first step lists speech first, but it is applied last."""
    ActionDispatcher(actuators).apply_all(PICKUP.steps[0].actions)

    assert [c.device for c in host.commands] == [
        "arm1",
        "arm2",
        "arm3",
        "arm4",
        "finger::left",
        "speaker",
    ]


def test_dispatch_keeps_listed_order_for_equal_priority(
    host: MockHost, actuators: Actuators
) -> None:
    ActionDispatcher(actuators).apply_all(
        [
            Speech(text="go"),
            BaseCommand(motion=BaseMotion.FORWARD),
            GripperCommand(command=GripperAction.GRIP),
            ArmTargets(positions={ArmJoint.ARM2: 0.1}),
        ]
    )

    devices = [c.device for c in host.commands]
    assert devices[0] == "arm2"
    assert devices[1:5] == ["wheel1", "wheel2", "wheel3", "wheel4"]
    assert devices[5:] == ["finger::left", "speaker"]


def test_dispatch_unknown_kind_raises(actuators: Actuators) -> None:
    dispatcher = ActionDispatcher(actuators)
    with pytest.raises(InvalidActionError):
        dispatcher.apply(SimpleNamespace(kind="laser"))


def test_register_custom_handler(actuators: Actuators) -> None:
    seen: list[object] = []
    dispatcher = ActionDispatcher(actuators)
    dispatcher.register("laser", lambda _act, action: seen.append(action))

    action = SimpleNamespace(kind="laser")
    dispatcher.apply(action)

    assert seen == [action]
    assert set(dispatcher.kinds) == {"arm", "base", "gripper", "speech", "laser"}
