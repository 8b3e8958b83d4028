# maskvm/errors.py
"""
maskvm Error Types

Structured error handling for the maskvm pipeline: reading an input
file, parsing command lines, validating configuration and running the
simulation passes.

Error Hierarchy:
────────────────
  MaskvmError (base)
  ├── InputError                 - input resource missing or unreadable
  ├── ParseError                 - malformed command line
  │   ├── UnknownCommandError    - line matches no command grammar
  │   ├── InvalidMaskCharacterError
  │   ├── MaskLengthError
  │   └── NumericOverflowError   - address/value wider than 64 bits
  ├── ConfigError                - invalid SimulationConfig
  └── SimulationError            - failure while running a pass
      └── ExpansionLimitError    - too many floating bits

Error Codes:
────────────
Each error has a code of the form MVM-XXXX, with ranges:
  - 0001-0999: Input errors
  - 1000-1999: Parse errors
  - 2000-2999: Configuration errors
  - 3000-3999: Simulation errors

Every error is fatal; callers never resume after one is raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional


@unique
class ErrorPhase(Enum):
    """Pipeline phase in which an error was detected."""

    INPUT = "input"
    PARSE = "parse"
    CONFIG = "config"
    SIMULATION = "simulation"


class ErrorCode:
    """
    Structured error code, rendered as PREFIX-NNNN.

    Compares equal to another ErrorCode with the same prefix and number,
    or to its rendered string.
    """

    __slots__ = ("prefix", "number", "phase")

    def __init__(self, prefix: str, number: int, phase: ErrorPhase) -> None:
        self.prefix = prefix
        self.number = number
        self.phase = phase

    @property
    def code(self) -> str:
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.phase.name})"

    def __hash__(self) -> int:
        return hash((self.prefix, self.number))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.prefix == other.prefix and self.number == other.number
        if isinstance(other, str):
            return self.code == other
        return False


class MaskvmErrorCodes:
    """Predefined error codes."""

    INPUT_UNREADABLE = ErrorCode("MVM", 1, ErrorPhase.INPUT)

    UNKNOWN_COMMAND = ErrorCode("MVM", 1001, ErrorPhase.PARSE)
    INVALID_MASK_CHARACTER = ErrorCode("MVM", 1002, ErrorPhase.PARSE)
    INVALID_MASK_LENGTH = ErrorCode("MVM", 1003, ErrorPhase.PARSE)
    NUMERIC_OVERFLOW = ErrorCode("MVM", 1004, ErrorPhase.PARSE)

    INVALID_CONFIG = ErrorCode("MVM", 2001, ErrorPhase.CONFIG)

    EXPANSION_LIMIT = ErrorCode("MVM", 3001, ErrorPhase.SIMULATION)


@dataclass(frozen=True)
class SourceSpan:
    """Location of a diagnostic. Line and column are 1-based; 0 means unknown."""

    file: str = "<input>"
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if self.line and self.column:
            return f"{self.file}:{self.line}:{self.column}"
        if self.line:
            return f"{self.file}:{self.line}"
        return self.file


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class MaskvmError(Exception):
    """
    Base exception for all maskvm errors.

    Carries an error code, an optional source span and an optional hint;
    ``str()`` yields a GCC-style one-line diagnostic.
    """

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        hint: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or MaskvmErrorCodes.UNKNOWN_COMMAND
        self.span = span
        self.hint = hint
        self.cause = cause

    def with_hint(self, hint: str) -> "MaskvmError":
        self.hint = hint
        return self

    def to_gcc_format(self) -> str:
        """Format as ``file:line:col: error: message [MVM-NNNN]``."""
        prefix = f"{self.span}: " if self.span is not None else ""
        text = f"{prefix}error: {self.message} [{self.code}]"
        if self.hint:
            text += f" (hint: {self.hint})"
        return text

    def __str__(self) -> str:
        return self.to_gcc_format()


class InputError(MaskvmError):
    """The input resource is missing or cannot be read."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        reason = getattr(cause, "strerror", None) or (str(cause) if cause else "unreadable")
        super().__init__(
            message=f"cannot read input {path!r}: {reason}",
            code=MaskvmErrorCodes.INPUT_UNREADABLE,
            span=SourceSpan(file=str(path)),
            cause=cause,
        )
        self.path = str(path)


# ───────────────────────────────────────────────────────────────────────────────
# PARSE ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class ParseError(MaskvmError):
    """A command line (or the mask inside it) is malformed."""

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        line: Optional[str] = None,
        column: int = 0,
        **kwargs,
    ) -> None:
        super().__init__(
            message=message,
            code=code or MaskvmErrorCodes.UNKNOWN_COMMAND,
            span=span,
            **kwargs,
        )
        self.line = line
        self.column = column

    def with_source(
        self,
        line: str,
        line_no: Optional[int] = None,
        source: str = "<input>",
    ) -> "ParseError":
        """Attach the offending raw line and its location."""
        self.line = line
        self.span = SourceSpan(file=source, line=line_no or 0, column=self.column)
        return self

    def to_gcc_format(self) -> str:
        text = super().to_gcc_format()
        if self.line is not None:
            text += f": {self.line!r}"
        return text


class UnknownCommandError(ParseError):
    """The line matches neither the mask nor the memory-assignment grammar."""

    def __init__(self, line: str, column: int = 0, **kwargs) -> None:
        super().__init__(
            message="unrecognised command",
            code=MaskvmErrorCodes.UNKNOWN_COMMAND,
            line=line,
            column=column,
            hint="expected 'mask = <36 x 0/1/X>' or 'mem[<address>] = <value>'",
            **kwargs,
        )


class InvalidMaskCharacterError(ParseError):
    """A mask symbol outside {0, 1, X}. *column* is 1-based."""

    def __init__(self, character: str, column: int, **kwargs) -> None:
        if len(character) == 1 and not character.isprintable():
            desc = f"U+{ord(character):04X}"
        else:
            desc = repr(character)
        super().__init__(
            message=f"invalid character in mask: {desc}",
            code=MaskvmErrorCodes.INVALID_MASK_CHARACTER,
            column=column,
            **kwargs,
        )
        self.character = character


class MaskLengthError(ParseError):
    """A mask whose length is not exactly the word width."""

    def __init__(self, length: int, expected: int, **kwargs) -> None:
        super().__init__(
            message=f"mask has {length} symbols, expected {expected}",
            code=MaskvmErrorCodes.INVALID_MASK_LENGTH,
            **kwargs,
        )
        self.length = length
        self.expected = expected


class NumericOverflowError(ParseError):
    """An address or value that does not fit the accepted integer width."""

    def __init__(self, text: str, bits: int, **kwargs) -> None:
        super().__init__(
            message=f"number {text} does not fit in {bits} bits",
            code=MaskvmErrorCodes.NUMERIC_OVERFLOW,
            **kwargs,
        )
        self.text = text
        self.bits = bits


# ───────────────────────────────────────────────────────────────────────────────
# CONFIGURATION AND SIMULATION ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class ConfigError(MaskvmError):
    """SimulationConfig failed validation."""

    def __init__(self, problems, **kwargs) -> None:
        self.problems = list(problems)
        super().__init__(
            message="invalid configuration: " + "; ".join(self.problems),
            code=MaskvmErrorCodes.INVALID_CONFIG,
            **kwargs,
        )


class SimulationError(MaskvmError):
    """Failure while running a simulation pass."""


class ExpansionLimitError(SimulationError):
    """A mask floats more bits than the configured expansion limit allows."""

    def __init__(self, floating_bits: int, limit: int, **kwargs) -> None:
        super().__init__(
            message=(
                f"mask floats {floating_bits} bits "
                f"({2 ** floating_bits} addresses), limit is {limit}"
            ),
            code=MaskvmErrorCodes.EXPANSION_LIMIT,
            hint="raise --max-floating-bits to allow larger expansions",
            **kwargs,
        )
        self.floating_bits = floating_bits
        self.limit = limit
