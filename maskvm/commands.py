# maskvm/commands.py
"""
Command variants produced by the parser.

There are exactly two shapes, so a command is a plain ``Union`` of two
frozen dataclasses and consumers dispatch with ``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from maskvm.mask import Masked


@dataclass(frozen=True, slots=True)
class SetMask:
    """``mask = <36 symbols>``"""

    mask: Masked

    def __str__(self) -> str:
        return f"mask = {self.mask}"


@dataclass(frozen=True, slots=True)
class Assign:
    """``mem[<address>] = <value>``"""

    address: int
    value: int

    def __post_init__(self) -> None:
        if self.address < 0 or self.value < 0:
            raise ValueError("address and value must be non-negative")

    def __str__(self) -> str:
        return f"mem[{self.address}] = {self.value}"


Command = Union[SetMask, Assign]
