"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

MISSING_VARIABLE_MESSAGE = "Переменная отсутствует в памяти"

FUNCTION_BODY_INDENT = "    "
LINE_SPLIT_PATTERN = r"\r\n|\n|\r"

DEFAULT_LINE_TERMINATOR = "\n"

# Debugger commands
CMD_RUN = "run"
CMD_STEP = "step"
CMD_STEP_OVER = "step over"
CMD_ADD_BREAK = "add break"
CMD_PRINT_TRACE = "print trace"
CMD_PRINT_MEM = "print mem"
CMD_SET_CODE = "set code"
CMD_END_SET_CODE = "end set code"

TRACE_LINE_TEMPLATE = "{line} {name}"
MEMORY_LINE_TEMPLATE = "{name} {value} {line}"
