"""Debugger configuration and execution metrics (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from . import constants


class BreakpointPolicy(Enum):
    """What happens to an active breakpoint once execution passes its line."""

    PERSISTENT = "persistent"
    ONE_SHOT = "one-shot"


@dataclass(frozen=True)
class DebuggerConfig:
    """Groups debugger configuration."""

    breakpoint_policy: BreakpointPolicy = BreakpointPolicy.PERSISTENT
    missing_variable_message: str = constants.MISSING_VARIABLE_MESSAGE
    line_terminator: str = constants.DEFAULT_LINE_TERMINATOR


@dataclass
class ExecutionStats:
    """Per-session execution counters."""

    steps: int = 0
    instructions_executed: int = 0
    calls: int = 0
    returns: int = 0
    breakpoint_hits: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    def report(self) -> str:
        return (
            f"{self.steps} steps, {self.instructions_executed} instructions executed, "
            f"{self.calls} calls, {self.returns} returns, "
            f"{self.breakpoint_hits} breakpoint hits"
        )
