"""Command-line entry point for the Kizhi debugger.

Usage:
    kizhi-debug program.kz --break 3 < commands.txt
    kizhi-debug program.kz --commands commands.txt --dump-state
    kizhi-debug --dump-program program.kz
    kizhi-debug < transcript.txt   # program embedded via 'set code' / 'end set code'
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from .api import dump_program
from .debugger import Debugger
from .errors import DebuggerError
from .run_types import BreakpointPolicy, DebuggerConfig

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kizhi-debug", description="Line-stepping debugger for Kizhi programs"
    )
    parser.add_argument("file", nargs="?", help="Program file to load")
    parser.add_argument(
        "--commands",
        "-c",
        default=None,
        help="File with one debugger command per line (default: stdin)",
    )
    parser.add_argument(
        "--break",
        "-b",
        dest="breakpoints",
        type=int,
        action="append",
        default=[],
        metavar="LINE",
        help="Declare a breakpoint (repeatable)",
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in BreakpointPolicy],
        default=BreakpointPolicy.PERSISTENT.value,
        help="Breakpoint policy (default: persistent)",
    )
    parser.add_argument(
        "--dump-program",
        action="store_true",
        help="Only print the parsed program and function table",
    )
    parser.add_argument(
        "--dump-state",
        action="store_true",
        help="Print the final engine state as JSON after the last command",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log step-by-step execution"
    )
    return parser


def _command_lines(stream: TextIO) -> Iterable[str]:
    for raw in stream:
        line = raw.rstrip("\r\n")
        if line.strip():
            yield line


def run_commands(debugger: Debugger, commands: Iterable[str]) -> int:
    """Execute each command, reporting failures and carrying on.

    Returns:
        The number of commands that failed.
    """
    failures = 0
    for command in commands:
        try:
            debugger.execute_line(command)
        except DebuggerError as exc:
            failures += 1
            logger.error("%s: %s", command.strip(), exc)
    return failures


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if args.dump_program:
        if not args.file:
            print("--dump-program requires a program file", file=sys.stderr)
            return 2
        print(dump_program(Path(args.file).read_text(encoding="utf-8")))
        return 0

    config = DebuggerConfig(
        breakpoint_policy=BreakpointPolicy(args.policy),
    )
    debugger = Debugger.for_stream(sys.stdout, config)
    for line in args.breakpoints:
        debugger.add_breakpoint(line)

    if args.file:
        try:
            debugger.load_program(Path(args.file).read_text(encoding="utf-8"))
        except DebuggerError as exc:
            logger.error("%s: %s", args.file, exc)
            return 1

    if args.commands:
        with open(args.commands, encoding="utf-8") as f:
            failures = run_commands(debugger, _command_lines(f))
    else:
        failures = run_commands(debugger, _command_lines(sys.stdin))

    session = debugger.session
    if args.dump_state and session is not None and session.engine is not None:
        print(json.dumps(session.engine.to_dict(), indent=2))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
