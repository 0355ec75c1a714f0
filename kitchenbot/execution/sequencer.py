"""Timed sequence engine.

Runs one routine at a time as a linear chain of steps. Each call to
:meth:`SequenceEngine.tick` compares the host's simulated time against the
current step's deadline; once the deadline has strictly passed, the engine
enters the next step, applies its actions, and sets a new deadline. After the
last step it applies the routine's ``finish`` actions and goes DONE.

The engine never advances time and never samples a wall clock: all timing
comes from ``host.now()``, so the observed dwell of a step lies in
``[dwell, dwell + time_step)``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from kitchenbot.control.dispatch import ActionDispatcher
from kitchenbot.errors import InvalidRoutineError
from kitchenbot.execution.routines import ROUTINES
from kitchenbot.execution.types import Routine, RoutineId
from kitchenbot.hardware.host import HostRuntime

logger = logging.getLogger(__name__)


class SequenceEngine:
    """Linear, timed state machine over static routine data.

    Args:
        host: Source of simulated time.
        dispatcher: Applies step actions to the actuators.
        routines: Routine table, keyed by id.
    """

    def __init__(
        self,
        host: HostRuntime,
        dispatcher: ActionDispatcher,
        routines: Mapping[RoutineId, Routine] = ROUTINES,
    ) -> None:
        self._host = host
        self._dispatcher = dispatcher
        self._routines = routines
        # None is the DONE sentinel
        self._routine: Routine | None = None
        self._index = -1
        self._deadline = 0.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self, routine_id: RoutineId) -> None:
        """Arm ``routine_id`` so the next tick enters its first step.

        Issues no actuator command. Replaces any routine already running.

        Raises:
            InvalidRoutineError: If the routine is not in the table.
        """
        routine = self._routines.get(routine_id)
        if routine is None:
            raise InvalidRoutineError(f"Unknown routine: {routine_id}")
        if self._routine is not None:
            logger.warning("Routine %s replaced by %s", self._routine.id.name, routine.id.name)
        self._routine = routine
        self._index = -1
        self._deadline = self._host.now()
        logger.info("Routine %s started at t=%.3f", routine.id.name, self._deadline)

    def tick(self) -> None:
        """Advance to the next step if the current dwell has elapsed."""
        routine = self._routine
        if routine is None:
            return

        now = self._host.now()
        if now <= self._deadline:
            return

        self._index += 1
        if self._index >= len(routine.steps):
            self._dispatcher.apply_all(routine.finish)
            self._finish()
            logger.info("Routine %s complete at t=%.3f", routine.id.name, now)
            return

        step = routine.steps[self._index]
        self._dispatcher.apply_all(step.actions)
        self._deadline = now + step.dwell_seconds
        logger.debug(
            "%s step %d entered at t=%.3f, deadline %.3f",
            routine.id.name,
            self._index + 1,
            now,
            self._deadline,
        )

    def abort(self) -> None:
        """Go DONE immediately.

        Latched actuator targets keep executing; pair with
        :meth:`~kitchenbot.control.actuators.Actuators.safe_stop` to halt.
        """
        if self._routine is not None:
            logger.warning(
                "Routine %s aborted at step %d", self._routine.id.name, self._index + 1
            )
        self._finish()

    def is_running(self) -> bool:
        return self._routine is not None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def routine(self) -> RoutineId | None:
        """Id of the active routine, or None when DONE."""
        return self._routine.id if self._routine is not None else None

    @property
    def step_index(self) -> int | None:
        """Zero-based index of the current step; -1 before the first tick."""
        return self._index if self._routine is not None else None

    @property
    def deadline(self) -> float | None:
        return self._deadline if self._routine is not None else None

    def _finish(self) -> None:
        self._routine = None
        self._index = -1
