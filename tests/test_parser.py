# tests/test_parser.py
"""
Tests for the command parser: raw lines → commands.
"""

import pytest

from maskvm.commands import Assign, SetMask
from maskvm.errors import (
    InputError,
    InvalidMaskCharacterError,
    MaskLengthError,
    NumericOverflowError,
    ParseError,
    UnknownCommandError,
)
from maskvm.mask import parse_mask
from maskvm.parser import parse_file, parse_line, parse_lines, read_lines
from tests.conftest import ALL_X, FLOATING_PROGRAM, VALUE_MASK_PROGRAM


class TestParseLine:

    def test_set_mask(self):
        cmd = parse_line("mask = XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X")
        assert isinstance(cmd, SetMask)
        assert cmd.mask == parse_mask("XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X")

    def test_assign(self):
        assert parse_line("mem[8] = 11") == Assign(address=8, value=11)

    def test_assign_zero(self):
        assert parse_line("mem[0] = 0") == Assign(0, 0)

    def test_leading_zeros(self):
        assert parse_line("mem[007] = 010") == Assign(7, 10)

    def test_large_numbers(self):
        cmd = parse_line(f"mem[{2 ** 36 - 1}] = {2 ** 64 - 1}")
        assert cmd == Assign(2 ** 36 - 1, 2 ** 64 - 1)

    @pytest.mark.parametrize("line", [
        "mask = " + ALL_X,
        "mask = 000000000000000000000000000000X1001X",
        "mem[42] = 100",
    ])
    def test_str_round_trip(self, line):
        cmd = parse_line(line)
        assert str(cmd) == line
        assert parse_line(str(cmd)) == cmd


class TestParseLineErrors:

    def test_unbalanced_bracket(self):
        with pytest.raises(UnknownCommandError) as ei:
            parse_line("mem[1 = 5", line_no=3, source="prog.txt")
        err = ei.value
        assert err.line == "mem[1 = 5"
        assert err.span.file == "prog.txt"
        assert err.span.line == 3
        assert err.code == "MVM-1001"

    @pytest.mark.parametrize("line", [
        "",
        "nop",
        "mem[a] = 5",
        "mem[1] = -5",
        "mem[1] = 5 # comment",
        "mask XXXX",
    ])
    def test_unknown(self, line):
        with pytest.raises(UnknownCommandError):
            parse_line(line)

    def test_bad_mask_character_reports_line_column(self):
        line = "mask = " + "X" * 4 + "Y" + "X" * 31
        with pytest.raises(InvalidMaskCharacterError) as ei:
            parse_line(line, line_no=1)
        assert ei.value.line == line
        # 1-based column within the whole line
        assert ei.value.span.column == len("mask = ") + 5
        assert line[ei.value.span.column - 1] == "Y"

    @pytest.mark.parametrize("body", ["", "X" * 35, "X" * 37])
    def test_bad_mask_length(self, body):
        with pytest.raises(MaskLengthError):
            parse_line("mask = " + body)

    def test_number_overflow(self):
        with pytest.raises(NumericOverflowError) as ei:
            parse_line(f"mem[1] = {2 ** 64}")
        assert ei.value.bits == 64
        assert ei.value.code == "MVM-1004"

    def test_address_overflow(self):
        with pytest.raises(NumericOverflowError):
            parse_line(f"mem[{2 ** 70}] = 1")

    def test_all_are_parse_errors(self):
        for line in ("mem[1 = 5", "mask = 2", f"mem[{2 ** 65}] = 0"):
            with pytest.raises(ParseError):
                parse_line(line)

    def test_message_names_the_line(self):
        with pytest.raises(ParseError) as ei:
            parse_line("mem[1 = 5", line_no=2, source="prog.txt")
        text = str(ei.value)
        assert text.startswith("prog.txt:2")
        assert "mem[1 = 5" in text
        assert "[MVM-1001]" in text


class TestParseLines:

    def test_preserves_order(self):
        commands = parse_lines(VALUE_MASK_PROGRAM)
        assert len(commands) == 4
        assert isinstance(commands[0], SetMask)
        assert [c for c in commands[1:]] == [Assign(8, 11), Assign(7, 101), Assign(8, 0)]

    def test_returns_tuple(self):
        assert isinstance(parse_lines(FLOATING_PROGRAM), tuple)

    def test_empty(self):
        assert parse_lines([]) == ()

    def test_first_bad_line_aborts(self):
        lines = ["mem[1] = 1", "garbage", "mem[2] = oops"]
        with pytest.raises(UnknownCommandError) as ei:
            parse_lines(lines, source="x.txt")
        assert ei.value.span.line == 2
        assert ei.value.line == "garbage"

    def test_blank_line_is_malformed(self):
        with pytest.raises(UnknownCommandError):
            parse_lines(["mem[1] = 1", "", "mem[2] = 2"])


class TestReadLines:

    def test_strips_newlines(self, write_program):
        path = write_program(["mem[1] = 1", "mem[2] = 2"])
        assert read_lines(path) == ["mem[1] = 1", "mem[2] = 2"]

    def test_crlf(self, tmp_path):
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"mem[1] = 1\r\nmem[2] = 2\r\n")
        assert read_lines(path) == ["mem[1] = 1", "mem[2] = 2"]

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "nope.txt"
        with pytest.raises(InputError) as ei:
            read_lines(missing)
        assert ei.value.path == str(missing)
        assert isinstance(ei.value.cause, OSError)
        assert ei.value.code == "MVM-0001"

    def test_directory(self, tmp_path):
        with pytest.raises(InputError):
            read_lines(tmp_path)

    def test_parse_file(self, write_program):
        path = write_program(FLOATING_PROGRAM)
        commands = parse_file(path)
        assert commands == parse_lines(FLOATING_PROGRAM)

    def test_parse_file_reports_path(self, write_program):
        path = write_program(["mem[1] = 1", "mem[1 = 5"])
        with pytest.raises(ParseError) as ei:
            parse_file(path)
        assert ei.value.span.file == str(path)
        assert ei.value.span.line == 2
