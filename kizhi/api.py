"""Composable API functions for loading, dumping and running Kizhi programs.

Each function corresponds to a CLI workflow (--dump-program, a command
transcript, a plain run) but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from .debugger import Debugger
from .parser import Program, parse_program
from .run_types import DebuggerConfig
from .session import SessionManager
from .sink import BufferSink

logger = logging.getLogger(__name__)


def load_program(source: str) -> Program:
    """Parse program text into its flat instruction list and function table.

    Args:
        source: The program text.

    Returns:
        A Program.
    """
    return parse_program(source)


def dump_program(source: str) -> str:
    """Load *source* and return a human-readable listing.

    The listing has one instruction per line, then the function table and
    an opcode histogram.

    Args:
        source: The program text.

    Returns:
        A multi-line string.
    """
    program = load_program(source)
    lines = [f"  {inst}" for inst in program.instructions]
    if len(program.functions):
        lines.append("")
        lines.append("Functions:")
        lines.extend(f"  {line}" for line in str(program.functions).splitlines())
    counts = Counter(inst.opcode.value for inst in program.instructions)
    if counts:
        lines.append("")
        lines.append(
            "Opcodes: " + ", ".join(f"{op}={n}" for op, n in sorted(counts.items()))
        )
    return "\n".join(lines)


def run_script(
    commands: Iterable[str],
    config: DebuggerConfig = DebuggerConfig(),
) -> list[str]:
    """Feed a command transcript through a fresh Debugger.

    Args:
        commands: Raw command strings, including program text.
        config: Debugger configuration.

    Returns:
        Every line the debugger emitted, in order.
    """
    sink = BufferSink()
    debugger = Debugger(sink, config)
    for command in commands:
        debugger.execute_line(command)
    return sink.lines


def run_program(
    source: str,
    breakpoints: Iterable[int] = (),
    config: DebuggerConfig = DebuggerConfig(),
) -> list[str]:
    """Run *source* from start to end, resuming after every breakpoint hit.

    Args:
        source: The program text.
        breakpoints: Declared breakpoint lines.
        config: Debugger configuration.

    Returns:
        The program's printed output lines.
    """
    sink = BufferSink()
    session = SessionManager(load_program(source), sink, config, breakpoints)
    hits = 0
    while session.run():
        hits += 1
    logger.info("Program finished after %d breakpoint hits", hits)
    return sink.lines
