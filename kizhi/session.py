"""Session lifecycle — owns at most one execution engine over a loaded program."""

from __future__ import annotations

import logging
from typing import Iterable

from .memory import VariableStore
from .parser import Program
from .run_types import DebuggerConfig
from .sink import LineSink
from .vm import ExecutionEngine

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates, reuses and replaces execution engines for one program.

    Run-initiating commands (run, step, step over) start a fresh session when
    there is no engine yet or the current one has reached the end of the
    program; a session paused at a breakpoint is resumed instead. Inspection
    commands look at whatever engine exists, ended or not.
    """

    def __init__(
        self,
        program: Program,
        sink: LineSink,
        config: DebuggerConfig = DebuggerConfig(),
        breakpoints: Iterable[int] = (),
    ):
        self._program = program
        self._sink = sink
        self._config = config
        self._declared_breakpoints: set[int] = set(breakpoints)
        self._engine: ExecutionEngine | None = None
        self.sessions_started = 0

    @property
    def program(self) -> Program:
        return self._program

    @property
    def engine(self) -> ExecutionEngine | None:
        return self._engine

    @property
    def declared_breakpoints(self) -> frozenset[int]:
        return frozenset(self._declared_breakpoints)

    def add_breakpoint(self, line: int) -> None:
        """Declare a breakpoint; a live session picks it up immediately."""
        self._declared_breakpoints.add(line)
        if self._engine is not None and not self._engine.ended:
            self._engine.add_breakpoint(line)
        logger.debug("Breakpoint declared on line %d", line)

    def run(self) -> bool:
        return self._live_engine().run_to_next_breakpoint()

    def step(self) -> None:
        self._live_engine().step()

    def step_over(self) -> None:
        self._live_engine().step_over()

    def print_trace(self) -> None:
        if self._engine is not None:
            self._engine.print_trace()

    def print_mem(self) -> None:
        if self._engine is not None:
            self._engine.print_mem()

    def _live_engine(self) -> ExecutionEngine:
        if self._engine is None or self._engine.ended:
            self._engine = self._new_engine()
        return self._engine

    def _new_engine(self) -> ExecutionEngine:
        self.sessions_started += 1
        logger.info(
            "Starting session %d with breakpoints %s",
            self.sessions_started,
            sorted(self._declared_breakpoints),
        )
        store = VariableStore(self._sink, self._config.missing_variable_message)
        return ExecutionEngine(
            self._program,
            store,
            self._sink,
            breakpoints=self._declared_breakpoints,
            policy=self._config.breakpoint_policy,
        )
