"""
maskvm/passes.py
================

The two simulation passes over a command sequence.

Part 1 – value masking
    The mask is applied to the value being written; addresses are
    literal.  ``0`` forces a value bit to 0, ``1`` forces it to 1 and
    ``X`` leaves it untouched.

Part 2 – address floating
    The mask is applied to the address.  ``1`` forces an address bit to
    1, ``0`` leaves it untouched and ``X`` floats: the value is written
    to every address obtained by setting each floating bit to both 0 and
    1.  A mask with *k* floating bits therefore writes 2**k cells, which
    is what ``SimulationConfig.max_floating_bits`` bounds.

Each pass folds the commands in order against its own fresh
:class:`~maskvm.machine.Machine`, so the two semantics never interact.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from maskvm.commands import Assign, Command, SetMask
from maskvm.errors import ExpansionLimitError
from maskvm.machine import Machine, SimulationConfig
from maskvm.mask import WORD_BITS, Masked

logger = logging.getLogger(__name__)


def apply_value_mask(mask: Masked, value: int) -> int:
    """Force the mask's ``0`` bits to 0 and its ``1`` bits to 1."""
    not_forced_zero = mask.care_mask | mask.value_bits
    return (value & not_forced_zero) | mask.value_bits


def expand_addresses(care_mask: int, address: int) -> List[int]:
    """All addresses obtained from *address* by floating the *care_mask* bits.

    Returns exactly ``2 ** popcount(care_mask)`` distinct addresses; every
    one agrees with *address* on the bits not set in *care_mask*.
    """
    result = [address]
    for i in range(WORD_BITS):
        bit = 1 << i
        if care_mask & bit:
            doubled = []
            for a in result:
                doubled.append(a | bit)
                doubled.append(a & ~bit)
            result = doubled
    return result


def _run(
    commands: Sequence[Command],
    config: Optional[SimulationConfig],
    assign: Callable[[Machine, Assign], None],
) -> int:
    machine = Machine(config=config)
    for command in commands:
        if isinstance(command, SetMask):
            machine.set_mask(command.mask)
        elif isinstance(command, Assign):
            assign(machine, command)
        else:
            raise TypeError(f"not a command: {command!r}")
    return machine.sum_values()


def _assign_masked_value(machine: Machine, command: Assign) -> None:
    machine.store(command.address, apply_value_mask(machine.mask, command.value))


def _assign_floating_address(machine: Machine, command: Assign) -> None:
    mask = machine.mask
    if mask.floating_bits > machine.config.max_floating_bits:
        raise ExpansionLimitError(mask.floating_bits, machine.config.max_floating_bits)

    base_address = command.address | mask.value_bits
    addresses = expand_addresses(mask.care_mask, base_address)
    logger.debug("%s expands to %d address(es)", command, len(addresses))
    for address in addresses:
        machine.store(address, command.value)


def run_value_masking(commands: Sequence[Command], config: Optional[SimulationConfig] = None) -> int:
    """Part 1: mask values, keep addresses literal. Returns the memory sum."""
    return _run(commands, config, _assign_masked_value)


def run_address_floating(commands: Sequence[Command], config: Optional[SimulationConfig] = None) -> int:
    """Part 2: float addresses, keep values unchanged. Returns the memory sum."""
    return _run(commands, config, _assign_floating_address)


# ===================================================================== #
#  Pass registry                                                         #
# ===================================================================== #

@dataclass(frozen=True)
class SimulationPass:
    part: int
    name: str
    run: Callable[[Sequence[Command], Optional[SimulationConfig]], int]


PASSES: Dict[int, SimulationPass] = {
    1: SimulationPass(1, "value masking", run_value_masking),
    2: SimulationPass(2, "address floating", run_address_floating),
}


def run_passes(commands: Sequence[Command], config: Optional[SimulationConfig] = None) -> Dict[int, int]:
    """Run every configured part, each on its own machine.

    Returns ``{part: sum}`` in ascending part order.
    """
    config = config or SimulationConfig()
    results: Dict[int, int] = {}
    for part in sorted(set(config.parts)):
        sim = PASSES[part]
        results[part] = sim.run(commands, config)
        logger.info("Part %d (%s) = %d", part, sim.name, results[part])
    return results
