"""Controller loop and process entry point.

One iteration per host tick, always in this order:

1. poll the keyboard and dispatch ANY_KEY if a key is down,
2. dispatch TICK,
3. tick the sequence engine,
4. step the host.

The loop is the only caller of ``host.step()``. When the host asks to
terminate, the loop stops all motion, releases the host, and exits 0.
"""

from __future__ import annotations

import logging
import sys

from kitchenbot.config import DEFAULT_CONFIG, ControllerConfig
from kitchenbot.control.actuators import Actuators
from kitchenbot.control.dispatch import ActionDispatcher
from kitchenbot.errors import HostTerminate, UnknownDeviceError
from kitchenbot.execution.sequencer import SequenceEngine
from kitchenbot.execution.supervisor import Event, Supervisor
from kitchenbot.hardware.host import HostRuntime, StepResult

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_STARTUP_FAILURE = 1


class Controller:
    """Owns the host, actuators, engine, and supervisor for one process."""

    def __init__(
        self,
        host: HostRuntime,
        actuators: Actuators,
        engine: SequenceEngine,
        supervisor: Supervisor,
    ) -> None:
        self.host = host
        self.actuators = actuators
        self.engine = engine
        self.supervisor = supervisor
        self.tick_count = 0

    @classmethod
    def build(cls, host: HostRuntime, config: ControllerConfig = DEFAULT_CONFIG) -> Controller:
        """Initialize the host and wire every component.

        Raises:
            UnknownDeviceError: If a configured device is missing. Nothing has
                been commanded at that point.
        """
        host.init()
        actuators = Actuators.resolve(host, config)
        actuators.configure()
        host.enable_keyboard(config.time_step_ms)

        engine = SequenceEngine(host, ActionDispatcher(actuators))
        supervisor = Supervisor(engine, actuators)
        logger.info("Controller ready, press any key to start")
        return cls(host, actuators, engine, supervisor)

    def run_once(self) -> None:
        """Run one tick.

        Raises:
            HostTerminate: If the host's step asked to shut down.
        """
        if self.host.poll_key() is not None:
            self.supervisor.dispatch(Event.ANY_KEY)
        self.supervisor.dispatch(Event.TICK)
        self.engine.tick()

        self.tick_count += 1
        if self.host.step() is StepResult.TERMINATE:
            raise HostTerminate(f"host terminated after {self.tick_count} ticks")

    def run(self, max_ticks: int | None = None) -> int:
        """Tick until the host terminates or ``max_ticks`` have run.

        Returns:
            Process exit code.
        """
        try:
            while max_ticks is None or self.tick_count < max_ticks:
                self.run_once()
        except HostTerminate as exc:
            logger.info("Shutting down: %s", exc)
            self.supervisor.shutdown()
            self.host.cleanup()
        return EXIT_SUCCESS


def main(host: HostRuntime | None = None, config: ControllerConfig = DEFAULT_CONFIG) -> int:
    """Build the controller against ``host`` (the simulator by default) and run it."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if host is None:
        from kitchenbot.hardware.webots import WebotsHost

        host = WebotsHost(config.time_step_ms)

    try:
        controller = Controller.build(host, config)
    except UnknownDeviceError as exc:
        logger.error("Startup failed: %s", exc)
        host.cleanup()
        return EXIT_STARTUP_FAILURE

    return controller.run()


if __name__ == "__main__":
    sys.exit(main())
