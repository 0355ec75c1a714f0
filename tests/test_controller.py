"""Integration tests for the controller loop: startup, key-triggered run, shutdown.

All tests run against MockHost, so no simulator is needed.
"""

from __future__ import annotations

import math

import pytest

from kitchenbot.config import ControllerConfig
from kitchenbot.controller import EXIT_STARTUP_FAILURE, EXIT_SUCCESS, Controller, main
from kitchenbot.errors import UnknownDeviceError
from kitchenbot.execution.supervisor import Mode
from kitchenbot.hardware.mock import MockHost

KEY_SPACE = 32


def _payload(text: str) -> str:
    return f'<prosody rate="0.75"><prosody pitch="-10st">{text}</prosody></prosody>'


# ------------------------------------------------------------------
# Startup
# ------------------------------------------------------------------


def test_build_applies_startup_settings(config: ControllerConfig) -> None:
    host = MockHost()
    Controller.build(host, config)

    assert host.init_calls == 1
    assert host.keyboard_period == 32
    assert host.last_value("speaker", "language") == "en-US"
    assert host.last_value("arm2", "velocity") == 0.5
    assert host.last_value("finger::left", "velocity") == 0.03
    for i in range(1, 5):
        assert host.last_value(f"wheel{i}", "position") == math.inf
        assert host.last_value(f"wheel{i}", "velocity") == 0.0
    assert host.step_count == 0


def test_missing_device_aborts_before_any_command(config: ControllerConfig) -> None:
    host = MockHost(missing={"arm3"})

    with pytest.raises(UnknownDeviceError) as excinfo:
        Controller.build(host, config)

    assert excinfo.value.name == "arm3"
    assert host.commands == []
    assert host.step_count == 0


def test_main_exits_nonzero_on_missing_device() -> None:
    host = MockHost(missing={"arm3"})

    code = main(host=host)

    assert code == EXIT_STARTUP_FAILURE
    assert host.commands == []
    assert host.step_count == 0
    assert host.cleanup_calls == 1


# ------------------------------------------------------------------
# Loop
# ------------------------------------------------------------------


def test_idle_until_key(controller: Controller, host: MockHost) -> None:
    controller.run(max_ticks=200)

    assert controller.supervisor.mode is Mode.IDLE
    assert host.commands == []
    assert host.step_count == 200


def test_full_scenario_from_key_press(config: ControllerConfig) -> None:
    """First key at ~5.0 s runs every routine in order and settles in COMPLETE."""
    key_tick = int(5.0 / 0.032) + 1
    host = MockHost(keys={key_tick: KEY_SPACE})
    controller = Controller.build(host, config)
    host.commands.clear()

    controller.run(max_ticks=key_tick)
    assert controller.supervisor.mode is Mode.IDLE
    assert host.commands == []

    controller.run(max_ticks=key_tick + 1)
    assert controller.supervisor.mode is Mode.RUN_PICKUP
    assert host.now() >= 5.0

    controller.run(max_ticks=2000)
    assert controller.supervisor.mode is Mode.COMPLETE

    spoken = [c.value for c in host.commands_for("speaker", "speak")]
    assert spoken == [
        _payload("Time for your vegetables!"),
        _payload("Here comes the nomm nomm train!"),
        _payload("Open up!"),
        _payload("FINE!... have it your way."),
        _payload("Jerk."),
        _payload("Now get out of my kitchen you filthy animal."),
        _payload("BODY SLAM COMING UP."),
        _payload("OUCH. I HAVE FALLEN AND CAN'T GET UP."),
    ]
    assert all(c.time >= 5.0 for c in host.commands)

    issued = len(host.commands)
    controller.run(max_ticks=3000)
    assert len(host.commands) == issued
    assert controller.supervisor.mode is Mode.COMPLETE


def test_terminate_cleans_up_once(config: ControllerConfig) -> None:
    host = MockHost(terminate_at=1000)
    controller = Controller.build(host, config)

    code = controller.run()

    assert code == EXIT_SUCCESS
    assert host.cleanup_calls == 1
    assert controller.tick_count == 1000
    assert host.wheel_velocities() == [0.0, 0.0, 0.0, 0.0]


def test_terminate_mid_routine_stops_motion(config: ControllerConfig) -> None:
    """TERMINATE while strafing: routine dropped, base and arm stopped, exit 0."""
    host = MockHost(keys={1: KEY_SPACE}, terminate_at=150)
    code = main(host=host, config=config)

    assert code == EXIT_SUCCESS
    assert host.cleanup_calls == 1
    assert host.wheel_velocities() == [0.0, 0.0, 0.0, 0.0]
    for i in range(1, 6):
        assert host.last_value(f"arm{i}", "velocity") == 0.0


def test_speech_failure_is_ignored(config: ControllerConfig) -> None:
    host = MockHost(keys={1: KEY_SPACE}, speech_fails=True)
    controller = Controller.build(host, config)

    controller.run(max_ticks=150)

    assert controller.supervisor.mode is Mode.RUN_MOVE_LEFT
    assert host.commands_for("speaker", "speak") == []
    assert host.last_value("finger::left", "position") == 0.0
