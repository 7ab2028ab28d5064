"""Execution engine — data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class CallFrame:
    function_name: str
    call_site_line: int
    return_boundary_line: int  # last body line; completing it pops the frame

    def trace_line(self) -> str:
        return constants.TRACE_LINE_TEMPLATE.format(
            line=self.call_site_line, name=self.function_name
        )

    def to_dict(self) -> dict:
        return {
            "function_name": self.function_name,
            "call_site_line": self.call_site_line,
            "return_boundary_line": self.return_boundary_line,
        }


@dataclass
class VariableRecord:
    value: int
    last_changed_line: int

    def to_dict(self) -> dict:
        return {"value": self.value, "last_changed_line": self.last_changed_line}
