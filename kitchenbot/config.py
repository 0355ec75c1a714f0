"""Compile-time controller configuration.

Device names, actuator constants, and speech prosody for the kitchen youBot.
There is no file or environment loading: :data:`DEFAULT_CONFIG` is the
configuration the controller runs with, and tests build variants directly.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ControllerConfig(BaseModel):
    """All constants the controller needs, grouped by subsystem.

    Attributes:
        time_step_ms: Fixed simulator step in milliseconds.
        arm_devices: Motor names for ARM1..ARM5, base rotation to wrist.
        wheel_devices: Mecanum wheel motor names, front-right first.
        finger_device: Gripper finger motor name.
        speaker_device: Speaker device name.
        base_speed: Wheel speed (rad/s) for every base motion.
        gripper_open: Finger position for ``release()`` (m).
        gripper_closed: Finger position for ``grip()`` (m).
        gripper_velocity: Finger velocity set at startup (m/s).
        arm2_velocity: ARM2 velocity set at startup (rad/s).
        speech_language: Language code given to the speaker.
        speech_volume: Volume for every utterance (0.0-1.0).
        speech_rate: Prosody rate wrapped around every utterance.
        speech_pitch: Prosody pitch wrapped around every utterance.
        speech_engine: Engine selected on Windows hosts, or None to keep the default.
    """

    model_config = ConfigDict(frozen=True)

    time_step_ms: int = Field(32, gt=0)

    arm_devices: tuple[str, str, str, str, str] = ("arm1", "arm2", "arm3", "arm4", "arm5")
    wheel_devices: tuple[str, str, str, str] = ("wheel1", "wheel2", "wheel3", "wheel4")
    finger_device: str = "finger::left"
    speaker_device: str = "speaker"

    base_speed: float = 4.0
    gripper_open: float = 0.025
    gripper_closed: float = 0.0
    gripper_velocity: float = 0.03
    arm2_velocity: float = 0.5

    speech_language: str = "en-US"
    speech_volume: float = Field(1.0, ge=0.0, le=1.0)
    speech_rate: float = 0.75
    speech_pitch: str = "-10st"
    speech_engine: str | None = "microsoft"

    @property
    def time_step(self) -> float:
        """Fixed step in seconds."""
        return self.time_step_ms / 1000.0


DEFAULT_CONFIG = ControllerConfig()
