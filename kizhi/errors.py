"""Exception hierarchy for program loading, command parsing and execution."""

from __future__ import annotations


class DebuggerError(Exception):
    """Base class for every error raised by the debugger."""

    pass


class ProgramParseError(DebuggerError, ValueError):
    """Raised when program text contains a line that is not a valid instruction."""

    def __init__(self, line: int, text: str, reason: str):
        self.line = line
        self.text = text
        self.reason = reason
        super().__init__(f"Line {line}: {reason}: {text!r}")


class CommandParseError(DebuggerError, ValueError):
    """Raised when a debugger command has a malformed argument."""

    pass


class UnknownFunctionError(DebuggerError, LookupError):
    """Raised when a ``call`` names a function the program never defines."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function: {name}")


class InstructionArgumentError(DebuggerError, ValueError):
    """Raised when an integer operand cannot be parsed at dispatch time."""

    def __init__(self, line: int, opcode: str, raw: str):
        self.line = line
        self.opcode = opcode
        self.raw = raw
        super().__init__(f"Line {line}: '{opcode}' expects an integer, got {raw!r}")
