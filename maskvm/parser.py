"""maskvm/parser.py – command lines → :mod:`maskvm.commands`.

Each line is matched against :data:`maskvm.grammar.COMMAND_GRAMMAR` and
the parse tree is folded into a command by :class:`CommandBuilder`.

Design principles
-----------------
* **Line-at-a-time** – lines are parsed independently; order is kept by
  :func:`parse_lines` because later commands override earlier state.
* **Fail-fast with location** – every :class:`~maskvm.errors.ParseError`
  carries the offending line and its ``file:line:col``.
* **No partial parses** – a line either matches one command completely
  or is rejected; nothing is skipped.

Public API
----------
``parse_line(line) -> Command``
``parse_lines(lines) -> Tuple[Command, ...]``
``read_lines(path) -> List[str]``
``parse_file(path) -> Tuple[Command, ...]``
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from parsimonious.exceptions import ParseError as PegParseError
from parsimonious.nodes import NodeVisitor

from maskvm.commands import Assign, Command, SetMask
from maskvm.errors import (
    InputError,
    MaskvmError,
    NumericOverflowError,
    ParseError,
    UnknownCommandError,
)
from maskvm.grammar import COMMAND_GRAMMAR
from maskvm.mask import VALUE_BITS, parse_mask

logger = logging.getLogger(__name__)

NUMBER_BITS = VALUE_BITS


class CommandBuilder(NodeVisitor):
    """Transforms a Parsimonious parse tree into a command."""

    grammar = COMMAND_GRAMMAR
    # Let our own diagnostics through instead of wrapping them in
    # parsimonious' VisitationError.
    unwrapped_exceptions = (MaskvmError,)

    def __init__(self, number_bits: int = NUMBER_BITS) -> None:
        self.number_bits = number_bits

    def generic_visit(self, node, visited_children):
        return visited_children or node

    def visit_command(self, node, visited_children):
        return visited_children[0]

    def visit_set_mask(self, node, visited_children):
        _, mask = visited_children
        return SetMask(mask)

    def visit_mask_body(self, node, visited_children):
        try:
            return parse_mask(node.text)
        except ParseError as exc:
            if exc.column:
                exc.column += node.start
            raise

    def visit_assign(self, node, visited_children):
        _, address, _, value = visited_children
        return Assign(address=address, value=value)

    def visit_number(self, node, visited_children):
        value = int(node.text)
        if value.bit_length() > self.number_bits:
            raise NumericOverflowError(node.text, self.number_bits, column=node.start + 1)
        return value


_builder = CommandBuilder()


def parse_line(line: str, line_no: Optional[int] = None, source: str = "<input>") -> Command:
    """Parse one raw line (without its newline) into a command."""
    try:
        tree = COMMAND_GRAMMAR.parse(line)
    except PegParseError as exc:
        pos = getattr(exc, "pos", -1)
        column = pos + 1 if pos is not None and pos >= 0 else 0
        raise UnknownCommandError(line, column=column).with_source(
            line, line_no, source
        ) from exc

    try:
        return _builder.visit(tree)
    except ParseError as exc:
        raise exc.with_source(line, line_no, source)


def parse_lines(lines: Iterable[str], source: str = "<input>") -> Tuple[Command, ...]:
    """Parse *lines* in order, aborting on the first malformed one."""
    commands = tuple(
        parse_line(line, line_no, source) for line_no, line in enumerate(lines, start=1)
    )
    logger.info("Parsed %d command(s) from %s", len(commands), source)
    return commands


def read_lines(path: Union[str, Path]) -> List[str]:
    """Read a UTF-8 text file and return its lines, newlines stripped.

    Raises :class:`~maskvm.errors.InputError` if the file is missing or
    cannot be read.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(str(path), exc) from exc
    lines = text.splitlines()
    logger.info("Read %d line(s) from %s", len(lines), p)
    return lines


def parse_file(path: Union[str, Path]) -> Tuple[Command, ...]:
    return parse_lines(read_lines(path), source=str(path))
