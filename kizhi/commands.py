"""Debugger command surface — raw command text to a tagged command."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .errors import CommandParseError
from . import constants


class CommandKind(Enum):
    RUN = "run"
    STEP = "step"
    STEP_OVER = "step_over"
    ADD_BREAK = "add_break"
    PRINT_TRACE = "print_trace"
    PRINT_MEM = "print_mem"
    SET_CODE = "set_code"
    END_SET_CODE = "end_set_code"
    PROGRAM = "program"


_EXACT_COMMANDS: dict[str, CommandKind] = {
    constants.CMD_RUN: CommandKind.RUN,
    constants.CMD_STEP: CommandKind.STEP,
    constants.CMD_STEP_OVER: CommandKind.STEP_OVER,
    constants.CMD_PRINT_TRACE: CommandKind.PRINT_TRACE,
    constants.CMD_PRINT_MEM: CommandKind.PRINT_MEM,
    constants.CMD_SET_CODE: CommandKind.SET_CODE,
    constants.CMD_END_SET_CODE: CommandKind.END_SET_CODE,
}


class DebuggerCommand(BaseModel):
    kind: CommandKind
    line: int | None = None  # ADD_BREAK target
    source: str = ""  # PROGRAM text


def parse_command(text: str) -> DebuggerCommand:
    """Classify *text* as a debugger command or program text.

    Anything that is not a recognised command is treated as program text,
    so command words always win over a program line with the same spelling.

    Raises:
        CommandParseError: If ``add break`` is not followed by an integer.
    """
    stripped = text.strip()
    kind = _EXACT_COMMANDS.get(stripped)
    if kind is not None:
        return DebuggerCommand(kind=kind)

    if stripped.startswith(constants.CMD_ADD_BREAK):
        arg = stripped[len(constants.CMD_ADD_BREAK) :].strip()
        try:
            line = int(arg)
        except ValueError as exc:
            raise CommandParseError(
                f"'{constants.CMD_ADD_BREAK}' expects a line number, got {arg!r}"
            ) from exc
        return DebuggerCommand(kind=CommandKind.ADD_BREAK, line=line)

    return DebuggerCommand(kind=CommandKind.PROGRAM, source=text)
