"""Supervisory state machine.

Top-level modes of the kitchen scenario. A key press in IDLE starts PICKUP;
from then on every TICK checks the sequence engine and, once the current
routine is done, starts the next one in canonical order until COMPLETE.

Transitions live in an explicit ``(mode, event) -> handler`` table. Pairs
missing from the table are ignored, which is what makes COMPLETE stable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from kitchenbot.control.actuators import Actuators
from kitchenbot.execution.routines import CANONICAL_ORDER
from kitchenbot.execution.sequencer import SequenceEngine
from kitchenbot.execution.types import RoutineId

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    IDLE = "idle"
    RUN_PICKUP = "run_pickup"
    RUN_MOVE_LEFT = "run_move_left"
    RUN_FEED = "run_feed"
    RUN_PUSH_FOOD = "run_push_food"
    RUN_DROP_FOOD = "run_drop_food"
    RUN_CLEAN_KITCHEN = "run_clean_kitchen"
    COMPLETE = "complete"


class Event(str, Enum):
    ANY_KEY = "any_key"
    TICK = "tick"


RUN_MODES: dict[RoutineId, Mode] = {r: Mode[f"RUN_{r.name}"] for r in RoutineId}
MODE_ROUTINES: dict[Mode, RoutineId] = {m: r for r, m in RUN_MODES.items()}


class SupervisorStatus(BaseModel):
    """Snapshot of the supervisor and the engine it drives."""

    model_config = ConfigDict(populate_by_name=True)

    mode: Mode = Mode.IDLE
    routine: RoutineId | None = None
    step_index: int | None = Field(None, alias="stepIndex")
    deadline: float | None = None
    completed: list[RoutineId] = Field(default_factory=list)


class Supervisor:
    """Table-driven supervisor over a :class:`SequenceEngine`.

    Args:
        engine: Sequence engine that runs each routine.
        actuators: Façade used for safe stops.
        order: Routines to run, in order, after the first key press.
    """

    def __init__(
        self,
        engine: SequenceEngine,
        actuators: Actuators,
        order: list[RoutineId] | None = None,
    ) -> None:
        self._engine = engine
        self._actuators = actuators
        self._order = list(CANONICAL_ORDER if order is None else order)
        self._position = -1
        self._mode = Mode.IDLE
        self._completed: list[RoutineId] = []
        self._table: dict[tuple[Mode, Event], Callable[[], None]] = {
            (Mode.IDLE, Event.ANY_KEY): self._on_first_key,
        }
        for routine in self._order:
            self._table[(RUN_MODES[routine], Event.TICK)] = self._on_run_tick

    @property
    def mode(self) -> Mode:
        return self._mode

    def dispatch(self, event: Event) -> None:
        """Feed one event through the transition table."""
        handler = self._table.get((self._mode, event))
        if handler is not None:
            handler()

    def shutdown(self) -> None:
        """Host is terminating: drop the routine and stop all motion."""
        logger.info("Supervisor shutdown in %s", self._mode.name)
        self._engine.abort()
        self._actuators.safe_stop()

    def reset(self) -> None:
        """Abort, stop all motion, and return to IDLE."""
        self._engine.abort()
        self._actuators.safe_stop()
        self._completed = []
        self._position = -1
        self._transition(Mode.IDLE)

    def status(self) -> SupervisorStatus:
        return SupervisorStatus(
            mode=self._mode,
            routine=self._engine.routine,
            step_index=self._engine.step_index,
            deadline=self._engine.deadline,
            completed=list(self._completed),
        )

    # ------------------------------------------------------------------
    # Transition handlers
    # ------------------------------------------------------------------

    def _on_first_key(self) -> None:
        if not self._order:
            self._transition(Mode.COMPLETE)
            return
        self._enter_routine(0)

    def _on_run_tick(self) -> None:
        if self._engine.is_running():
            return
        self._completed.append(MODE_ROUTINES[self._mode])
        if self._position + 1 < len(self._order):
            self._enter_routine(self._position + 1)
        else:
            self._transition(Mode.COMPLETE)

    def _enter_routine(self, position: int) -> None:
        routine = self._order[position]
        self._position = position
        self._transition(RUN_MODES[routine])
        self._engine.start(routine)

    def _transition(self, mode: Mode) -> None:
        logger.info("Supervisor: %s -> %s", self._mode.name, mode.name)
        self._mode = mode
