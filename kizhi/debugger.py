"""Debugger front door — routes raw command text to the loader and the session."""

from __future__ import annotations

import logging
from typing import TextIO

from .commands import CommandKind, DebuggerCommand, parse_command
from .parser import Program, parse_program
from .run_types import DebuggerConfig
from .session import SessionManager
from .sink import LineSink, StreamSink
from . import constants

logger = logging.getLogger(__name__)


class Debugger:
    """Accepts one command per call, in arrival order.

    Program text may arrive bare or wrapped between ``set code`` and
    ``end set code``; text inside the markers is always read as code.
    Breakpoints declared before a program is loaded, or before it is
    reloaded, carry over to the new program.
    """

    def __init__(self, sink: LineSink, config: DebuggerConfig = DebuggerConfig()):
        self._sink = sink
        self._config = config
        self._session: SessionManager | None = None
        self._pending_breakpoints: set[int] = set()
        self._code_buffer: list[str] | None = None

    @classmethod
    def for_stream(
        cls, stream: TextIO, config: DebuggerConfig = DebuggerConfig()
    ) -> Debugger:
        return cls(StreamSink(stream, config.line_terminator), config)

    @property
    def session(self) -> SessionManager | None:
        return self._session

    @property
    def program(self) -> Program | None:
        return self._session.program if self._session is not None else None

    def execute_line(self, text: str) -> None:
        if self._code_buffer is not None and text.strip() != constants.CMD_END_SET_CODE:
            self._code_buffer.append(text)
            return
        self.dispatch(parse_command(text))

    def dispatch(self, command: DebuggerCommand) -> None:
        kind = command.kind
        if kind == CommandKind.SET_CODE:
            self._code_buffer = []
        elif kind == CommandKind.END_SET_CODE:
            self._finish_code_block()
        elif kind == CommandKind.PROGRAM:
            self.load_program(command.source)
        elif kind == CommandKind.ADD_BREAK:
            self.add_breakpoint(command.line)
        elif self._session is None:
            logger.warning("No program loaded; ignoring '%s'", kind.value)
        elif kind == CommandKind.RUN:
            self._session.run()
        elif kind == CommandKind.STEP:
            self._session.step()
        elif kind == CommandKind.STEP_OVER:
            self._session.step_over()
        elif kind == CommandKind.PRINT_TRACE:
            self._session.print_trace()
        elif kind == CommandKind.PRINT_MEM:
            self._session.print_mem()
        else:
            raise ValueError(f"Unhandled command kind: {kind}")

    def load_program(self, source: str) -> Program:
        """Parse *source* and start over with a fresh session manager."""
        program = parse_program(source)
        breakpoints = (
            self._session.declared_breakpoints
            if self._session is not None
            else self._pending_breakpoints
        )
        self._session = SessionManager(
            program, self._sink, self._config, breakpoints=breakpoints
        )
        return program

    def add_breakpoint(self, line: int) -> None:
        if self._session is None:
            self._pending_breakpoints.add(line)
            return
        self._session.add_breakpoint(line)

    def _finish_code_block(self) -> None:
        lines, self._code_buffer = self._code_buffer, None
        if not lines:
            logger.warning("'%s' without program text", constants.CMD_END_SET_CODE)
            return
        self.load_program("\n".join(lines))
