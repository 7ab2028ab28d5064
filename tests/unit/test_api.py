"""Tests for the composable API functions in kizhi.api."""

import pytest

from kizhi.api import dump_program, load_program, run_program, run_script
from kizhi.constants import MISSING_VARIABLE_MESSAGE
from kizhi.errors import ProgramParseError
from kizhi.parser import Program
from kizhi.run_types import BreakpointPolicy, DebuggerConfig

FUNCTION_SOURCE = """\
def greet
    set x 3
    print x
call greet
sub x 1
print x
"""


class TestLoadProgram:
    def test_returns_program(self):
        program = load_program(FUNCTION_SOURCE)

        assert isinstance(program, Program)
        assert len(program) == 6
        assert "greet" in program.functions

    def test_invalid_source_raises(self):
        with pytest.raises(ProgramParseError):
            load_program("print")


class TestDumpProgram:
    def test_lists_instructions(self):
        result = dump_program(FUNCTION_SOURCE)

        assert "0: def greet" in result
        assert "1:     set x 3" in result
        assert "3: call greet" in result

    def test_lists_function_table_and_opcodes(self):
        result = dump_program(FUNCTION_SOURCE)

        assert "Functions:" in result
        assert "greet: lines 0-2" in result
        assert "Opcodes: call=1, def=1, print=2, set=1, sub=1" in result

    def test_repeated_opcodes_are_summed(self):
        result = dump_program("def f\n    sub a 1\nset a 3\ncall f\ncall f\nprint a")

        assert "Opcodes: call=2, def=1, print=1, set=1, sub=1" in result

    def test_program_without_functions(self):
        result = dump_program("set a 1")

        assert "Functions:" not in result
        assert "Opcodes: set=1" in result


class TestRunProgram:
    def test_runs_to_completion(self):
        assert run_program(FUNCTION_SOURCE) == ["3", "2"]

    def test_breakpoints_do_not_change_output(self):
        assert run_program(FUNCTION_SOURCE, breakpoints=[1, 2, 5]) == ["3", "2"]

    def test_missing_variable_diagnostic(self):
        assert run_program("print a") == [MISSING_VARIABLE_MESSAGE]


class TestRunScript:
    def test_transcript_output(self):
        lines = run_script([FUNCTION_SOURCE, "add break 2", "run", "print trace", "print mem"])

        assert lines == ["3 greet", "x 3 1"]

    def test_config_is_applied(self):
        lines = run_script(
            ["print a", "run"],
            config=DebuggerConfig(
                breakpoint_policy=BreakpointPolicy.ONE_SHOT,
                missing_variable_message="?",
            ),
        )

        assert lines == ["?"]
