"""Execution engine — instruction pointer, call stack and breakpoint-aware stepping."""

from __future__ import annotations

import logging
from typing import Iterable

from .errors import InstructionArgumentError
from .ir import Instruction, Opcode
from .memory import VariableStore
from .parser import Program
from .run_types import BreakpointPolicy, ExecutionStats
from .sink import LineSink
from .vm_types import CallFrame

logger = logging.getLogger(__name__)


def _parse_int_operand(inst: Instruction, index: int) -> int:
    raw = inst.operands[index]
    try:
        return int(raw)
    except ValueError as exc:
        raise InstructionArgumentError(inst.line, inst.opcode.value, raw) from exc


class ExecutionEngine:
    """Steps through one session of a loaded program.

    The program is a flat list: function bodies sit in place right after
    their ``def`` line and only run via ``call``. There is no return
    instruction; a call frame pops when the last line of its body completes.
    """

    def __init__(
        self,
        program: Program,
        store: VariableStore,
        sink: LineSink,
        breakpoints: Iterable[int] = (),
        policy: BreakpointPolicy = BreakpointPolicy.PERSISTENT,
    ):
        self._program = program
        self._store = store
        self._sink = sink
        self._policy = policy
        self.ip = 0
        self.call_stack: list[CallFrame] = []
        self.active_breakpoints: set[int] = set(breakpoints)
        self.stats = ExecutionStats()
        self._paused_line: int | None = None

    @property
    def ended(self) -> bool:
        return self.ip >= len(self._program.instructions)

    @property
    def paused_line(self) -> int | None:
        """Line of the breakpoint the engine is resting on, if any."""
        return self._paused_line

    @property
    def store(self) -> VariableStore:
        return self._store

    @property
    def current_instruction(self) -> Instruction | None:
        if self.ended:
            return None
        return self._program.instructions[self.ip]

    # ── stepping ─────────────────────────────────────────────────

    def step(self) -> None:
        """Advance by one instruction.

        ``def`` and ``call`` lines consume a step without touching the
        variable store; every other line is dispatched to it.
        """
        if self.ended:
            logger.debug("step() on an ended session ignored")
            return

        self._paused_line = None
        line = self.ip
        inst = self._program.instructions[line]
        logger.debug("[step %d] %s", self.stats.steps, inst)

        if inst.opcode == Opcode.DEF:
            self._skip_definition(inst)
        elif inst.opcode == Opcode.CALL:
            self._enter_call(inst)
        else:
            self._execute(inst)
            self._unwind_returns()
            self.ip += 1

        self.stats.steps += 1
        if self._policy == BreakpointPolicy.ONE_SHOT:
            self.active_breakpoints.discard(line)
        if self.ended:
            logger.info("Program ended (%s)", self.stats.report())

    def run_to_next_breakpoint(self) -> bool:
        """Step until the pointer lands on an active breakpoint or the program ends.

        The current line is checked before anything executes, so a fresh
        session stops on a breakpoint at line 0 and a step onto a
        breakpointed line stops there too. Only the line the engine is
        already paused on is executed without re-firing.

        Returns:
            True if execution paused at a breakpoint, False if it ended.
        """
        if self.ended:
            return False
        if self.ip in self.active_breakpoints and self._paused_line != self.ip:
            self._pause()
            return True

        while True:
            self.step()
            if self.ended:
                return False
            if self.ip in self.active_breakpoints:
                self._pause()
                return True

    def step_over(self) -> None:
        """Like step(), but runs a ``call`` to completion as one unit.

        Breakpoints inside the called function are ignored. Stepping over
        the program's final top-level call runs it to the end.
        """
        inst = self.current_instruction
        if inst is None or inst.opcode != Opcode.CALL:
            self.step()
            return

        depth = len(self.call_stack)
        self.step()
        while len(self.call_stack) > depth and not self.ended:
            self.step()

    # ── breakpoints & inspection ─────────────────────────────────

    def add_breakpoint(self, line: int) -> None:
        self.active_breakpoints.add(line)

    def print_trace(self) -> None:
        """Emit one line per call frame, innermost first."""
        for frame in reversed(self.call_stack):
            self._sink.write_line(frame.trace_line())

    def print_mem(self) -> None:
        self._store.dump()

    def to_dict(self) -> dict:
        return {
            "ip": self.ip,
            "ended": self.ended,
            "call_stack": [f.to_dict() for f in self.call_stack],
            "active_breakpoints": sorted(self.active_breakpoints),
            "variables": self._store.to_dict(),
            "stats": self.stats.to_dict(),
        }

    # ── instruction handlers ─────────────────────────────────────

    def _skip_definition(self, inst: Instruction) -> None:
        entry = self._program.functions.lookup(inst.target)
        self.ip = entry.last_line + 1

    def _enter_call(self, inst: Instruction) -> None:
        entry = self._program.functions.lookup(inst.target)
        if not entry.has_body:
            logger.debug("Function %s has an empty body; call is a no-op", entry.name)
            self.ip += 1
            return
        self.call_stack.append(
            CallFrame(
                function_name=entry.name,
                call_site_line=self.ip,
                return_boundary_line=entry.last_line,
            )
        )
        self.stats.calls += 1
        self.ip = entry.first_body_line

    def _execute(self, inst: Instruction) -> None:
        line = self.ip
        name = inst.target
        if inst.opcode == Opcode.SET:
            self._store.set(line, name, _parse_int_operand(inst, 1))
        elif inst.opcode == Opcode.SUB:
            self._store.sub(line, name, _parse_int_operand(inst, 1))
        elif inst.opcode == Opcode.PRINT:
            self._store.print_value(name)
        elif inst.opcode == Opcode.REM:
            self._store.remove(name)
        else:
            raise ValueError(f"Opcode {inst.opcode.value} is not a store operation")
        self.stats.instructions_executed += 1

    def _unwind_returns(self) -> None:
        # An inner return can land on the outer frame's last line, so pop in a loop.
        while self.call_stack and self.call_stack[-1].return_boundary_line == self.ip:
            frame = self.call_stack.pop()
            self.ip = frame.call_site_line
            self.stats.returns += 1
            logger.debug("Returned from %s to line %d", frame.function_name, self.ip)

    def _pause(self) -> None:
        self._paused_line = self.ip
        self.stats.breakpoint_hits += 1
        logger.info("Paused at breakpoint on line %d", self.ip)
