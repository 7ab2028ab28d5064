"""Tests for command parsing."""

import pytest

from kizhi.commands import CommandKind, parse_command
from kizhi.errors import CommandParseError


class TestExactCommands:
    @pytest.mark.parametrize(
        "text, kind",
        [
            ("run", CommandKind.RUN),
            ("step", CommandKind.STEP),
            ("step over", CommandKind.STEP_OVER),
            ("print trace", CommandKind.PRINT_TRACE),
            ("print mem", CommandKind.PRINT_MEM),
            ("set code", CommandKind.SET_CODE),
            ("end set code", CommandKind.END_SET_CODE),
        ],
    )
    def test_command_words(self, text, kind):
        assert parse_command(text).kind == kind

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_command("  run\r\n").kind == CommandKind.RUN


class TestAddBreak:
    def test_line_number_is_parsed(self):
        command = parse_command("add break 4")

        assert command.kind == CommandKind.ADD_BREAK
        assert command.line == 4

    def test_number_without_space(self):
        assert parse_command("add break12").line == 12

    def test_non_integer_is_rejected(self):
        with pytest.raises(CommandParseError, match="line number"):
            parse_command("add break four")


class TestProgramText:
    def test_other_text_is_program(self):
        source = "def test\n    set a 5\ncall test"
        command = parse_command(source)

        assert command.kind == CommandKind.PROGRAM
        assert command.source == source

    def test_single_program_line(self):
        assert parse_command("print a").kind == CommandKind.PROGRAM
