"""
maskvm/machine.py
=================

Simulation state shared by both passes.

* ``Machine``          – current mask plus a sparse address → value memory
* ``SimulationConfig`` – configuration dataclass for a simulation run

A ``Machine`` is created fresh for every pass and never shared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Collection, Dict, List, Optional, Tuple

from maskvm.mask import TRANSPARENT_MASK, WORD_BITS, Masked

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Tuning knobs for a simulation run."""
    max_floating_bits: int = WORD_BITS
    parts: Tuple[int, ...] = (1, 2)

    def validate(self, known_parts: Optional[Collection[int]] = None) -> List[str]:
        """Return a list of validation problems (empty if valid).

        When *known_parts* is given, every selected part must be one of them.
        """
        problems: List[str] = []
        if not 0 <= self.max_floating_bits <= WORD_BITS:
            problems.append(f"max_floating_bits must be between 0 and {WORD_BITS}")
        if not self.parts:
            problems.append("at least one part must be selected")
        for part in self.parts:
            if known_parts is not None and part not in known_parts:
                problems.append(f"unknown part {part!r}")
        return problems


@dataclass
class Machine:
    """Current mask and sparse memory of one simulation pass."""
    config: Optional[SimulationConfig] = None
    mask: Masked = TRANSPARENT_MASK
    memory: Dict[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = SimulationConfig()

    def set_mask(self, mask: Masked) -> None:
        logger.debug("mask = %s", mask)
        self.mask = mask

    def store(self, address: int, value: int) -> None:
        self.memory[address] = value

    def sum_values(self) -> int:
        return sum(self.memory.values())

    def __len__(self) -> int:
        return len(self.memory)
