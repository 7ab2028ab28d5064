"""Instruction model — one parsed program line, addressed by its line index."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Opcode(str, Enum):
    # Variable store operations
    SET = "set"
    SUB = "sub"
    PRINT = "print"
    REM = "rem"
    # Control flow
    CALL = "call"
    DEF = "def"


OPERAND_COUNTS: dict[Opcode, int] = {
    Opcode.SET: 2,
    Opcode.SUB: 2,
    Opcode.PRINT: 1,
    Opcode.REM: 1,
    Opcode.CALL: 1,
    Opcode.DEF: 1,
}

class Instruction(BaseModel):
    model_config = ConfigDict(frozen=True)

    opcode: Opcode
    operands: tuple[str, ...] = ()
    line: int = 0
    in_body: bool = False  # indented function-body line

    @property
    def target(self) -> str:
        """Variable or function name the instruction acts on."""
        return self.operands[0]

    def __str__(self) -> str:
        parts = [self.opcode.value, *self.operands]
        text = " ".join(parts)
        if self.in_body:
            return f"{self.line}:     {text}"
        return f"{self.line}: {text}"
