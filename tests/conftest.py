"""Shared test fixtures for the kitchenbot test suite."""

from __future__ import annotations

import pytest

from kitchenbot.config import ControllerConfig
from kitchenbot.control.actuators import Actuators
from kitchenbot.control.dispatch import ActionDispatcher
from kitchenbot.controller import Controller
from kitchenbot.execution.sequencer import SequenceEngine
from kitchenbot.hardware.mock import MockHost


@pytest.fixture()
def config() -> ControllerConfig:
    return ControllerConfig()


@pytest.fixture()
def host() -> MockHost:
    """A fake host at t=0 with the keyboard untouched."""
    return MockHost()


@pytest.fixture()
def actuators(host: MockHost, config: ControllerConfig) -> Actuators:
    """Resolved façade over the fake host; startup settings not applied."""
    return Actuators.resolve(host, config)


@pytest.fixture()
def engine(host: MockHost, actuators: Actuators) -> SequenceEngine:
    return SequenceEngine(host, ActionDispatcher(actuators))


@pytest.fixture()
def controller(host: MockHost, config: ControllerConfig) -> Controller:
    """Fully built controller; startup commands are cleared so tests see only routine output."""
    ctl = Controller.build(host, config)
    host.commands.clear()
    return ctl
