"""Program loader — splits raw program text into a flat instruction list."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .errors import ProgramParseError
from .ir import OPERAND_COUNTS, Instruction, Opcode
from .registry import FunctionTable, build_registry
from . import constants

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(constants.LINE_SPLIT_PATTERN)


@dataclass(frozen=True)
class Program:
    """A loaded program: the flat instruction list and its function table."""

    instructions: tuple[Instruction, ...] = ()
    functions: FunctionTable = field(default_factory=FunctionTable)

    def __len__(self) -> int:
        return len(self.instructions)

    def __str__(self) -> str:
        return "\n".join(str(inst) for inst in self.instructions)


def split_lines(source: str) -> list[str]:
    """Split on any line terminator and drop blank lines before numbering."""
    return [line for line in _LINE_SPLIT_RE.split(source) if line.strip()]


def parse_line(line: int, text: str, inside_function: bool) -> Instruction:
    """Parse one program line into an Instruction.

    Args:
        line: Index the instruction will occupy in the flat list.
        text: Raw line text, including any body indentation.
        inside_function: Whether a ``def`` header precedes this line.

    Raises:
        ProgramParseError: On an unknown opcode, a wrong operand count, an
            indented line outside a function, or a nested ``def``.
    """
    in_body = text.startswith(constants.FUNCTION_BODY_INDENT)
    body = text[len(constants.FUNCTION_BODY_INDENT) :] if in_body else text
    parts = body.split()
    if not parts:
        raise ProgramParseError(line, text, "blank instruction")

    op_text, operands = parts[0], tuple(parts[1:])
    try:
        opcode = Opcode(op_text)
    except ValueError as exc:
        raise ProgramParseError(line, text, f"unknown operation {op_text!r}") from exc

    expected = OPERAND_COUNTS[opcode]
    if len(operands) != expected:
        raise ProgramParseError(
            line, text, f"'{opcode.value}' takes {expected} operand(s), got {len(operands)}"
        )
    if in_body and not inside_function:
        raise ProgramParseError(line, text, "indented line outside a function body")
    if in_body and opcode == Opcode.DEF:
        raise ProgramParseError(line, text, "nested function definitions are not supported")

    return Instruction(opcode=opcode, operands=operands, line=line, in_body=in_body)


def parse_program(source: str) -> Program:
    """Parse program text into a Program.

    ``def NAME`` lines and their 4-space-indented bodies stay in place, so a
    function body is the contiguous range right after its header.
    """
    instructions: list[Instruction] = []
    inside_function = False
    for i, text in enumerate(split_lines(source)):
        inst = parse_line(i, text, inside_function)
        if inst.opcode == Opcode.DEF:
            inside_function = True
        elif not inst.in_body:
            inside_function = False
        instructions.append(inst)

    functions = build_registry(instructions)
    logger.info(
        "Loaded program: %d instructions, %d functions",
        len(instructions),
        len(functions),
    )
    return Program(instructions=tuple(instructions), functions=functions)
