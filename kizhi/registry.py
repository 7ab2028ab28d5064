"""Function table — maps a function name to its line range in the flat program."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from .errors import ProgramParseError, UnknownFunctionError
from .ir import Instruction, Opcode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionEntry:
    name: str
    define_line: int
    last_line: int  # == define_line for an empty body

    @property
    def first_body_line(self) -> int:
        return self.define_line + 1

    @property
    def has_body(self) -> bool:
        return self.last_line > self.define_line

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "define_line": self.define_line,
            "last_line": self.last_line,
        }


@dataclass
class FunctionTable:
    entries: dict[str, FunctionEntry] = field(default_factory=dict)

    def lookup(self, name: str) -> FunctionEntry:
        """Return the entry for *name*.

        Raises ``UnknownFunctionError`` if the program never defines it.
        """
        entry = self.entries.get(name)
        if entry is None:
            raise UnknownFunctionError(name)
        return entry

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FunctionEntry]:
        return iter(self.entries.values())

    def __str__(self) -> str:
        return "\n".join(
            f"{e.name}: lines {e.define_line}-{e.last_line}" for e in self
        )


def build_registry(instructions: list[Instruction]) -> FunctionTable:
    """Scan the flat instruction list for ``def`` lines and their bodies.

    A body is the run of indented instructions immediately following the
    ``def``. Raises ``ProgramParseError`` if a name is defined twice.
    """
    table = FunctionTable()
    for i, inst in enumerate(instructions):
        if inst.opcode != Opcode.DEF:
            continue
        if inst.target in table:
            raise ProgramParseError(
                i,
                str(inst),
                f"function already defined on line {table.entries[inst.target].define_line}",
            )
        last = i
        while last + 1 < len(instructions) and instructions[last + 1].in_body:
            last += 1
        table.entries[inst.target] = FunctionEntry(
            name=inst.target, define_line=i, last_line=last
        )
    logger.debug("Registered %d functions", len(table))
    return table
