# tests/conftest.py
"""
Shared sample programs and helpers for the maskvm test-suite.
"""

import textwrap

import pytest


def _program(src: str) -> list:
    return textwrap.dedent(src).strip().splitlines()


# Value-masking reference program: part 1 sums to 165.
VALUE_MASK_PROGRAM = _program("""
    mask = XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X
    mem[8] = 11
    mem[7] = 101
    mem[8] = 0
""")

# Address-floating reference program: part 2 sums to 208.
FLOATING_PROGRAM = _program("""
    mask = 000000000000000000000000000000X1001X
    mem[42] = 100
    mask = 00000000000000000000000000000000X0XX
    mem[26] = 1
""")

ALL_X = "X" * 36
ALL_ZERO = "0" * 36
ALL_ONE = "1" * 36


@pytest.fixture
def write_program(tmp_path):
    """Write lines to a program file and return its path."""
    def _write(lines, name="program.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
