"""Actuator façade over the host runtime.

Thin wrappers for the youBot's base, arm, gripper, and speaker. Every call is
non-blocking and fire-and-forget: the simulator's motor controllers track the
latched targets between ticks, and nothing here ever advances time.
"""

from __future__ import annotations

import logging
import math
import sys

from kitchenbot.config import ControllerConfig
from kitchenbot.execution.types import ArmJoint, BaseMotion
from kitchenbot.hardware.host import Handle, HostRuntime

logger = logging.getLogger(__name__)

# Per-wheel sign of the base speed for each motion (mecanum layout, wheel1..wheel4).
WHEEL_PATTERNS: dict[BaseMotion, tuple[int, int, int, int]] = {
    BaseMotion.FORWARD: (1, 1, 1, 1),
    BaseMotion.BACKWARD: (-1, -1, -1, -1),
    BaseMotion.STRAFE_LEFT: (1, -1, -1, 1),
    BaseMotion.STRAFE_RIGHT: (-1, 1, 1, -1),
    BaseMotion.TURN_LEFT: (1, -1, 1, -1),
    BaseMotion.TURN_RIGHT: (-1, 1, -1, 1),
    BaseMotion.RESET: (0, 0, 0, 0),
}


class Base:
    """Four-wheel mecanum base driven in velocity mode."""

    def __init__(self, host: HostRuntime, wheels: list[Handle], speed: float) -> None:
        self._host = host
        self._wheels = wheels
        self._speed = speed

    def configure(self) -> None:
        """Switch every wheel to velocity control and stop it."""
        for wheel in self._wheels:
            self._host.set_position(wheel, math.inf)
            self._host.set_velocity(wheel, 0.0)

    def move(self, motion: BaseMotion) -> None:
        for wheel, sign in zip(self._wheels, WHEEL_PATTERNS[motion], strict=True):
            self._host.set_velocity(wheel, sign * self._speed)

    def forward(self) -> None:
        self.move(BaseMotion.FORWARD)

    def backward(self) -> None:
        self.move(BaseMotion.BACKWARD)

    def strafe_left(self) -> None:
        self.move(BaseMotion.STRAFE_LEFT)

    def strafe_right(self) -> None:
        self.move(BaseMotion.STRAFE_RIGHT)

    def turn_left(self) -> None:
        self.move(BaseMotion.TURN_LEFT)

    def turn_right(self) -> None:
        self.move(BaseMotion.TURN_RIGHT)

    def reset(self) -> None:
        """Zero all wheel velocities."""
        self.move(BaseMotion.RESET)


class Arm:
    """Five-joint arm; position targets are tracked by the simulator."""

    def __init__(self, host: HostRuntime, joints: dict[ArmJoint, Handle]) -> None:
        self._host = host
        self._joints = joints

    def set_joint_position(self, joint: ArmJoint, radians: float) -> None:
        self._host.set_position(self._joints[joint], radians)

    def set_joint_velocity(self, joint: ArmJoint, rad_per_s: float) -> None:
        self._host.set_velocity(self._joints[joint], rad_per_s)


class Gripper:
    def __init__(
        self,
        host: HostRuntime,
        finger: Handle,
        *,
        open_position: float,
        closed_position: float,
        velocity: float,
    ) -> None:
        self._host = host
        self._finger = finger
        self._open = open_position
        self._closed = closed_position
        self._velocity = velocity

    def configure(self) -> None:
        self._host.set_velocity(self._finger, self._velocity)

    def grip(self) -> None:
        self._host.set_position(self._finger, self._closed)

    def release(self) -> None:
        self._host.set_position(self._finger, self._open)


class Speaker:
    """Text-to-speech with a fixed prosody envelope.

    Speech is non-essential: backend failures are logged and dropped.
    """

    def __init__(self, host: HostRuntime, device: Handle, config: ControllerConfig) -> None:
        self._host = host
        self._device = device
        self._config = config

    def configure(self) -> None:
        if sys.platform == "win32" and self._config.speech_engine:
            self._host.set_engine(self._device, self._config.speech_engine)
        self._host.set_language(self._device, self._config.speech_language)

    def wrap(self, text: str) -> str:
        """Wrap ``text`` in the rate and pitch prosody envelope."""
        cfg = self._config
        return (
            f'<prosody rate="{cfg.speech_rate}">'
            f'<prosody pitch="{cfg.speech_pitch}">{text}</prosody></prosody>'
        )

    def speak(self, text: str) -> None:
        logger.info("Speak: %s", text)
        try:
            self._host.speak(self._device, self.wrap(text), self._config.speech_volume)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Speech backend failed for %r: %s", text, exc)

    def is_speaking(self) -> bool:
        return self._host.is_speaking(self._device)


class Actuators:
    """Bundle of the four sub-façades plus a safe stop.

    Build with :meth:`resolve`, which looks up every device before any
    command is issued, then call :meth:`configure` once.
    """

    def __init__(
        self,
        base: Base,
        arm: Arm,
        gripper: Gripper,
        speaker: Speaker,
        *,
        arm2_velocity: float | None = None,
    ) -> None:
        self.base = base
        self.arm = arm
        self.gripper = gripper
        self.speaker = speaker
        self._arm2_velocity = arm2_velocity

    @classmethod
    def resolve(cls, host: HostRuntime, config: ControllerConfig) -> Actuators:
        """Resolve all device handles.

        Raises:
            UnknownDeviceError: If any configured device is missing.
        """
        joints = {
            joint: host.resolve_device(name)
            for joint, name in zip(ArmJoint, config.arm_devices, strict=True)
        }
        wheels = [host.resolve_device(name) for name in config.wheel_devices]
        finger = host.resolve_device(config.finger_device)
        speaker = host.resolve_device(config.speaker_device)
        logger.debug("Resolved %d devices", len(joints) + len(wheels) + 2)

        return cls(
            base=Base(host, wheels, config.base_speed),
            arm=Arm(host, joints),
            gripper=Gripper(
                host,
                finger,
                open_position=config.gripper_open,
                closed_position=config.gripper_closed,
                velocity=config.gripper_velocity,
            ),
            speaker=Speaker(host, speaker, config),
            arm2_velocity=config.arm2_velocity,
        )

    def configure(self) -> None:
        """Apply startup settings: speech language, wheel mode, finger and ARM2 speed."""
        self.speaker.configure()
        self.base.configure()
        self.gripper.configure()
        if self._arm2_velocity is not None:
            self.arm.set_joint_velocity(ArmJoint.ARM2, self._arm2_velocity)

    def safe_stop(self) -> None:
        """Stop the base and zero every arm joint velocity."""
        logger.info("Safe stop")
        self.base.reset()
        for joint in ArmJoint:
            self.arm.set_joint_velocity(joint, 0.0)
