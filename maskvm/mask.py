"""maskvm/mask.py – 36-bit three-symbol bitmasks.

A mask line such as ``XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X`` is decoded
into two bit patterns:

``care_mask``
    1 wherever the symbol was ``X`` (don't care / floating).
``value_bits``
    1 wherever the symbol was ``1`` (forced one).

A ``0`` symbol sets neither. The leftmost symbol is bit 35, the rightmost
bit 0. The two patterns never overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from maskvm.errors import InvalidMaskCharacterError, MaskLengthError

WORD_BITS: Final[int] = 36
WORD_MASK: Final[int] = (1 << WORD_BITS) - 1

# Addresses and values are unsigned 64-bit machine words.
VALUE_BITS: Final[int] = 64
VALUE_MASK: Final[int] = (1 << VALUE_BITS) - 1

FLOATING: Final[str] = "X"
FORCED_ONE: Final[str] = "1"
FORCED_ZERO: Final[str] = "0"


@dataclass(frozen=True, slots=True)
class Masked:
    """A parsed mask. Immutable; rendered back with ``str()``."""

    care_mask: int
    value_bits: int

    def __post_init__(self) -> None:
        if self.care_mask & ~VALUE_MASK or self.value_bits & ~VALUE_MASK:
            raise ValueError(f"mask patterns must fit in {VALUE_BITS} bits")
        if self.care_mask & self.value_bits:
            raise ValueError("care_mask and value_bits overlap")

    @property
    def floating_bits(self) -> int:
        """Number of ``X`` positions among the 36 mask symbols."""
        return (self.care_mask & WORD_MASK).bit_count()

    @property
    def forced_zero_bits(self) -> int:
        return WORD_MASK & ~(self.care_mask | self.value_bits)

    def __str__(self) -> str:
        return render_mask(self)


# Initial machine mask: every bit of a machine word passes through unchanged.
TRANSPARENT_MASK: Final[Masked] = Masked(care_mask=VALUE_MASK, value_bits=0)


def parse_mask(text: str) -> Masked:
    """Decode a 36-symbol mask string.

    Raises :class:`MaskLengthError` when *text* is not exactly 36
    characters long and :class:`InvalidMaskCharacterError` on the first
    symbol outside ``{0, 1, X}``.
    """
    if len(text) != WORD_BITS:
        raise MaskLengthError(len(text), WORD_BITS)

    care_mask = 0
    value_bits = 0
    for i, symbol in enumerate(text):
        bit = 1 << (WORD_BITS - 1 - i)
        if symbol == FORCED_ONE:
            value_bits |= bit
        elif symbol == FLOATING:
            care_mask |= bit
        elif symbol != FORCED_ZERO:
            raise InvalidMaskCharacterError(symbol, column=i + 1)
    return Masked(care_mask=care_mask, value_bits=value_bits)


def render_mask(mask: Masked) -> str:
    """Render *mask* as its canonical 36-symbol string."""
    symbols = []
    for i in reversed(range(WORD_BITS)):
        bit = 1 << i
        if mask.care_mask & bit:
            symbols.append(FLOATING)
        elif mask.value_bits & bit:
            symbols.append(FORCED_ONE)
        else:
            symbols.append(FORCED_ZERO)
    return "".join(symbols)
